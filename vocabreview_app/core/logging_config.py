"""
Logging for VocabReview.

One named logger (``vocabreview``) owns the handlers: a console stream and,
unless disabled, a size-rotated file. Engine modules log through children of
it via ``get_logger(__name__)``; the Flask app logger reuses its handlers.
"""

import logging
import logging.handlers
import os
from typing import Optional

LOGGER_NAME = 'vocabreview'
LOG_FILE_NAME = 'vocabreview.log'
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

PLAIN_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
JSON_FORMAT = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'


def _formatter(json_format: bool) -> logging.Formatter:
    return logging.Formatter(JSON_FORMAT if json_format else PLAIN_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')


def _rotating_file_handler(log_dir: str) -> logging.Handler:
    os.makedirs(log_dir, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        os.path.join(log_dir, LOG_FILE_NAME),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding='utf-8',
    )


def setup_logging(app=None, log_level: str = 'INFO', log_dir: Optional[str] = None,
                  json_format: bool = False) -> logging.Logger:
    """
    (Re)configure the ``vocabreview`` logger and return it.

    Args:
        app: Flask app being configured; quiets werkzeug's request log when given
        log_level: DEBUG, INFO, WARNING or ERROR (unknown names fall back to INFO)
        log_dir: Directory for the rotating file. ``None`` means ``<project>/logs``,
            an empty string disables file logging.
        json_format: Emit one JSON object per line
    """
    if log_dir is None:
        project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
        log_dir = os.path.join(project_root, 'logs')

    level = getattr(logging, str(log_level).upper(), logging.INFO)
    formatter = _formatter(json_format)

    handlers = [logging.StreamHandler()]
    if log_dir:
        handlers.append(_rotating_file_handler(log_dir))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)
        old_handler.close()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if app is not None:
        logging.getLogger('werkzeug').setLevel(logging.WARNING)

    logger.debug("Logging ready (level=%s, file=%s)", logging.getLevelName(level), log_dir or 'disabled')
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Child logger of ``vocabreview`` (``get_logger(__name__)`` in engine modules)."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{LOGGER_NAME}.{name}')
