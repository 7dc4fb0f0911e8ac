# File: vocabreview_app/modules/quiz/config.py


class QuizDefaultConfig:
    """
    Default settings for the quiz module.
    App config keys (QUIZ_*) take precedence when set.
    """
    MIN_QUESTIONS_PER_SESSION = 1
    MAX_QUESTIONS_PER_SESSION = 50
    OPTION_COUNT = 4
    DISTRACTOR_POOL_SIZE = 10


def get_quiz_setting(app, name: str):
    """Read QUIZ_<name> from the app config, falling back to QuizDefaultConfig."""
    return app.config.get(f'QUIZ_{name}', getattr(QuizDefaultConfig, name))
