"""
Quiz engine exceptions and their mapping onto the JSON API.

Every failure the core raises is a QuizEngineError subclass carrying its own
``code`` and HTTP status; the boundary turns it into the error envelope:

    {"status": "error", "success": false, "message": ..., "code": ..., "details": ...}
"""

from typing import Any, Dict, Optional

from flask import current_app, jsonify, request


def _envelope(message: str, code: str, details: Optional[Dict[str, Any]] = None) -> dict:
    body = {
        'status': 'error',
        'success': False,
        'message': message,
        'code': code,
    }
    if details:
        body['details'] = details
    return body


class QuizEngineError(Exception):
    """Base class; subclasses override ``code``, ``status_code`` and ``default_message``."""

    code = 'UNKNOWN_ERROR'
    status_code = 500
    default_message = 'Unexpected error'

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None,
                 status_code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return _envelope(self.message, self.code, self.details)


class ValidationError(QuizEngineError):
    """Request body or argument failed validation. ``errors`` maps field -> messages."""

    code = 'VALIDATION_ERROR'
    status_code = 400
    default_message = 'Validation failed'

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict] = None):
        super().__init__(message, details={'errors': errors} if errors else None)


class AuthenticationError(QuizEngineError):
    code = 'UNAUTHENTICATED'
    status_code = 401
    default_message = 'Authentication required'


class ForbiddenError(QuizEngineError):
    code = 'FORBIDDEN'
    status_code = 403
    default_message = 'Access denied'


class NotFoundError(QuizEngineError):
    code = 'NOT_FOUND'
    status_code = 404
    default_message = 'Resource not found'

    def __init__(self, message: Optional[str] = None, resource: Optional[str] = None):
        super().__init__(message, details={'resource': resource} if resource else None)


class NoWordsAvailableError(QuizEngineError):
    """The learner has nothing due for review."""

    code = 'NO_WORDS_AVAILABLE'
    status_code = 404
    default_message = 'No words available for quiz. All words are up to date!'


class ConflictError(QuizEngineError):
    """The resource's current state does not allow the operation."""

    code = 'CONFLICT'
    status_code = 409
    default_message = 'Conflict'


class AlreadyAnsweredError(ConflictError):
    code = 'ALREADY_ANSWERED'
    default_message = 'Question already answered.'


class SessionEndedError(ConflictError):
    code = 'SESSION_ENDED'
    default_message = 'Quiz session has already ended.'


class InsufficientDataError(QuizEngineError):
    """A word lacks the definitions or related words a question needs."""

    code = 'INSUFFICIENT_DATA'
    status_code = 422
    default_message = 'Not enough data to generate a question'

    def __init__(self, message: Optional[str] = None, required: Optional[int] = None,
                 found: Optional[int] = None):
        details = {'required': required, 'found': found} if required is not None else None
        super().__init__(message, details=details)


class StorageFailureError(QuizEngineError):
    """A store transaction failed and was rolled back."""

    code = 'STORAGE_FAILURE'
    status_code = 500
    default_message = 'Storage failure'


def error_response(message: str, code: str = 'ERROR', status_code: int = 400, details: Dict = None) -> tuple:
    return jsonify(_envelope(message, code, details)), status_code


def success_response(data: Any = None, message: str = 'Success') -> dict:
    return {
        'status': 'success',
        'success': True,
        'message': message,
        'data': data,
    }


def register_error_handlers(app):
    """Install the JSON error handlers on ``app``."""

    @app.errorhandler(QuizEngineError)
    def handle_quiz_engine_error(error):
        log = current_app.logger.error if error.status_code >= 500 else current_app.logger.info
        log(f"{request.method} {request.path} -> {error.status_code} {error.code}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    def _api_only(status_code, code, message):
        def handler(error):
            if not request.path.startswith('/api/'):
                return error
            if status_code >= 500:
                current_app.logger.exception(f"Unhandled error on {request.path}")
            return error_response(message, code, status_code)
        return handler

    app.register_error_handler(404, _api_only(404, 'NOT_FOUND', 'Endpoint not found'))
    app.register_error_handler(405, _api_only(405, 'METHOD_NOT_ALLOWED', 'Method not allowed'))
    app.register_error_handler(500, _api_only(500, 'SERVER_ERROR', 'Internal server error'))
