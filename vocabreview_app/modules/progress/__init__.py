"""Progress module: per-word scheduler state and the learner's mastery statistics."""

from flask import Blueprint

from .repository import ProgressRepository
from .schemas import ProgressStats

blueprint = Blueprint('progress', __name__)

# Module Metadata
module_metadata = {
    'name': 'Learning Progress',
    'category': 'Learning',
    'url_prefix': '/api/progress',
    'enabled': True
}


def setup_module(app):
    from .routes import api  # noqa: F401


__all__ = ['ProgressRepository', 'ProgressStats', 'blueprint']
