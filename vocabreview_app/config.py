# File: vocabreview_app/config.py
# Application configuration, read from the environment (.env supported).

import os

from dotenv import load_dotenv

load_dotenv()

# vocabreview_app/ lives one level below the project root
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

DATABASE_PATH = os.path.join(BASE_DIR, "database", "vocabreview.db")


def _env_int(name: str, default: int) -> int:
    raw_value = os.environ.get(name)
    try:
        return int(raw_value) if raw_value is not None else default
    except ValueError:
        return default


class Config:
    """Configuration for the VocabReview application."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # Fallback for development, though env is preferred
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')
    LOG_JSON_FORMAT = os.environ.get('LOG_JSON_FORMAT', 'false').lower() == 'true'

    # Quiz engine
    QUIZ_OPTION_COUNT = _env_int('QUIZ_OPTION_COUNT', 4)
    QUIZ_DISTRACTOR_POOL_SIZE = _env_int('QUIZ_DISTRACTOR_POOL_SIZE', 10)
    QUIZ_MAX_QUESTIONS_PER_SESSION = _env_int('QUIZ_MAX_QUESTIONS_PER_SESSION', 50)

    # Header carrying the learner id resolved by the upstream auth gateway
    AUTH_USER_HEADER = os.environ.get('AUTH_USER_HEADER', 'X-User-Id')
