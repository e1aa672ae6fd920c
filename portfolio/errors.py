# portfolio/errors.py
from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException
from portfolio.config import is_production
from portfolio.logging_config import setup_logging

logger = setup_logging()


class ApiError(Exception):
    """An error a route wants rendered as ``{"error": ...}`` with a status code."""

    def __init__(self, message, status=400, details=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details


def error_response(message, status, exc=None):
    body = {'error': message}
    if exc is not None and not is_production(current_app):
        body['details'] = str(exc)
    return jsonify(body), status


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        body = {'error': error.message}
        if error.details is not None:
            body['details'] = error.details
        return jsonify(body), error.status

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.name}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception(f"Unhandled error: {error}")
        if is_production(app):
            return jsonify({'error': 'Internal server error'}), 500
        return jsonify({'error': 'Internal server error', 'details': str(error)}), 500
