"""
Error Handling for the FlashLearn JSON API

Services raise ``FlashLearnError`` subclasses; the handlers registered here
turn them into the standard envelope:

    {"success": false, "message": "...", "code": "...", "details": {...}}

Successful responses use ``success_response`` so every route answers with
the same shape.
"""

from typing import Any, Dict, List, Optional

from flask import current_app, jsonify, request


class FlashLearnError(Exception):
    """Base class. Subclasses pin ``code`` and ``status_code``."""

    code = 'UNKNOWN_ERROR'
    status_code = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict:
        body = {'success': False, 'message': self.message, 'code': self.code}
        if self.details:
            body['details'] = self.details
        return body


class NotFoundError(FlashLearnError):
    code = 'NOT_FOUND'
    status_code = 404

    def __init__(self, message: str = 'Resource not found', resource: str = None):
        super().__init__(message, details={'resource': resource} if resource else None)


class ValidationError(FlashLearnError):
    """``details.errors`` lists ``{field, message}`` pairs."""
    code = 'VALIDATION_ERROR'
    status_code = 400

    def __init__(self, message: str = 'Validation failed', errors: List[Dict[str, str]] = None):
        super().__init__(message, details={'errors': errors} if errors else None)


class ConflictError(FlashLearnError):
    """Request clashes with stored state: duplicate account, stale token, wrong password."""
    code = 'BAD_REQUEST'
    status_code = 400


class AuthenticationError(FlashLearnError):
    code = 'UNAUTHENTICATED'
    status_code = 401

    def __init__(self, message: str = 'Authentication required', details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)


class AuthorizationError(FlashLearnError):
    code = 'UNAUTHORIZED'
    status_code = 403

    def __init__(self, message: str = 'Access denied'):
        super().__init__(message)


def error_response(message: str, code: str = 'ERROR', status_code: int = 400, details: Dict = None) -> tuple:
    """``(response, status)`` in the error envelope."""
    body = {'success': False, 'message': message, 'code': code}
    if details:
        body['details'] = details
    return jsonify(body), status_code


def success_response(data: Any = None, message: str = None, status_code: int = 200) -> tuple:
    """``(response, status)`` in the success envelope; ``data``/``message`` only when given."""
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return jsonify(body), status_code


# HTTP errors raised by Flask itself, answered as JSON under /api/
_HTTP_ERRORS = {
    404: ('Route not found', 'NOT_FOUND'),
    405: ('Method not allowed', 'METHOD_NOT_ALLOWED'),
}


def _is_api_request() -> bool:
    return request.path.startswith('/api/')


def register_error_handlers(app):
    """Attach the JSON error handlers to ``app``."""

    @app.errorhandler(FlashLearnError)
    def handle_flashlearn_error(error):
        log = current_app.logger.error if error.status_code >= 500 else current_app.logger.info
        log(f"{error.code} ({error.status_code}) on {request.method} {request.path}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    def _http_error_handler(status_code, message, code):
        def handler(error):
            if _is_api_request():
                return error_response(message, code, status_code)
            return error
        return handler

    for status_code, (message, code) in _HTTP_ERRORS.items():
        app.register_error_handler(status_code, _http_error_handler(status_code, message, code))

    @app.errorhandler(500)
    def handle_internal_error(error):
        current_app.logger.exception('Internal server error')
        if _is_api_request():
            return error_response('Internal server error', 'SERVER_ERROR', 500)
        return error
