"""
Error types and HTTP error handling.

Each error class fixes its ``code`` and ``status_code``; instances carry a
message and optional ``details``. Under ``/api/`` errors are answered with
JSON, elsewhere with an HTML error page.
"""

from typing import Any, Dict, Optional

from flask import current_app, jsonify, render_template, request


class VocabPracticeError(Exception):
    """Base class for errors the app reports to users."""

    code = 'UNKNOWN_ERROR'
    status_code = 500
    default_message = 'Something went wrong'

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = {key: value for key, value in (details or {}).items() if value}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details,
        }


class ValidationError(VocabPracticeError):
    """Input rejected before anything was written."""

    code = 'VALIDATION_ERROR'
    status_code = 400
    default_message = 'Validation failed'

    def __init__(self, message: str = None, errors: Dict = None):
        super().__init__(message, {'errors': errors})


class NotFoundError(VocabPracticeError):
    code = 'NOT_FOUND'
    status_code = 404
    default_message = 'Resource not found'

    def __init__(self, message: str = None, resource: str = None):
        super().__init__(message, {'resource': resource})


class AuthorizationError(VocabPracticeError):
    code = 'UNAUTHORIZED'
    status_code = 403
    default_message = 'Access denied'


class StoreError(VocabPracticeError):
    """The data store rejected a read or write; the transaction was rolled back."""

    code = 'STORE_ERROR'
    status_code = 503
    default_message = 'Data store operation failed'

    def __init__(self, message: str = None, operation: str = None):
        super().__init__(message, {'operation': operation})


class SubmitError(StoreError):
    """The submission and its answers could not be stored."""

    code = 'SUBMIT_FAILED'
    default_message = 'Failed to submit answers'

    def __init__(self, message: str = None):
        super().__init__(message, operation='submit')


class WizardStateError(VocabPracticeError):
    """The practice wizard is not on a step that offers this action."""

    code = 'INVALID_STEP'
    status_code = 409
    default_message = 'Invalid practice step'

    def __init__(self, message: str = None, step: str = None):
        super().__init__(message, {'step': step})


def error_response(message: str, code: str = 'ERROR', status_code: int = 400, details: Dict = None) -> tuple:
    """JSON body for a failed API call."""
    body = {'success': False, 'message': message, 'code': code}
    if details:
        body['details'] = details
    return jsonify(body), status_code


def success_response(data: Any = None, message: str = None) -> dict:
    """JSON body for a successful API call."""
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return body


def _is_api_request() -> bool:
    return request.path.startswith('/api/')


def register_error_handlers(app):
    """Attach the error handlers to ``app``."""

    @app.errorhandler(VocabPracticeError)
    def handle_app_error(error):
        log = current_app.logger.warning if error.status_code < 500 else current_app.logger.error
        log(f"{error.code}: {error.message}")
        if _is_api_request():
            return jsonify(error.to_dict()), error.status_code
        return render_template('errors/error.html', error=error), error.status_code

    @app.errorhandler(404)
    def handle_not_found(error):
        if _is_api_request():
            return error_response('Endpoint not found', 'NOT_FOUND', 404)
        return render_template('errors/not_found.html'), 404

    @app.errorhandler(500)
    def handle_internal_error(error):
        current_app.logger.exception('Internal server error')
        if _is_api_request():
            return error_response('Internal server error', 'SERVER_ERROR', 500)
        return error
