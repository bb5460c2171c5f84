import logging
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError

from vtube.errors import InvalidArgument, InternalError
from vtube.models import db, is_valid_id

logger = logging.getLogger(__name__)


def require_id(value, label: str) -> str:
    """Return the normalized id or raise InvalidArgument."""
    if not value or not is_valid_id(value):
        raise InvalidArgument(f"Invalid {label} id")
    return value.lower()


def require_text(value, label: str, max_length: int) -> str:
    """Return the trimmed text or raise InvalidArgument when empty or too long."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"{label} is required")
    value = value.strip()
    if len(value) > max_length:
        raise InvalidArgument(f"{label} must be at most {max_length} characters")
    return value


def store_operation(f):
    """Decorator converting store failures into InternalError after a rollback."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception(f"Store failure in {f.__name__}")
            raise InternalError("There was a problem while accessing the database") from e
    return decorated_function
