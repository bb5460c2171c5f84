"""
API error taxonomy and the Flask handlers that render it.

Every failure leaving the application is shaped as::

    {"statusCode": 404, "data": null, "message": "...", "errors": [...], "success": false}
"""
import logging
from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from vtube.models import db

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str = None, errors: list | None = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "statusCode": self.status_code,
            "data": None,
            "message": self.message,
            "errors": self.errors,
            "success": False,
        }


class InvalidArgument(ApiError):
    status_code = 400
    default_message = "Invalid argument"


class Unauthorized(ApiError):
    status_code = 401
    default_message = "Unauthorized request"


class Forbidden(ApiError):
    status_code = 403
    default_message = "You don't have permission to perform this action"


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(ApiError):
    status_code = 409
    default_message = "Resource already exists"


class InternalError(ApiError):
    status_code = 500
    default_message = "Internal server error"


def error_response(error: ApiError):
    return jsonify(error.to_dict()), error.status_code


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return error_response(error)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        api_error = ApiError(error.description)
        api_error.status_code = error.code
        return error_response(api_error)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.exception("Unhandled database error")
        return error_response(InternalError())
