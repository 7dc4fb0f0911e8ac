"""Quiz module: spaced-repetition review sessions over the learner's saved words."""

from flask import Blueprint

blueprint = Blueprint('quiz', __name__)

# Module Metadata
module_metadata = {
    'name': 'Vocabulary Quiz',
    'category': 'Learning',
    'url_prefix': '/api/quiz',
    'enabled': True
}


def setup_module(app):
    """Attach the quiz API routes to the blueprint."""
    from .routes import api  # noqa: F401
