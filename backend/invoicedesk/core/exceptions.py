"""
Domain errors and non-leaky HTTP error factories.

Store failures are logged in full and surfaced to clients as a generic
message. Validation failures carry field-level detail because the user
caused them and the form needs it to highlight the offending input.
"""
import functools
import logging
from typing import Dict, List

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class InvoiceDeskError(Exception):
    """Base class for all domain errors."""


class ValidationError(InvoiceDeskError):
    """Form input was missing, malformed or carried unknown fields."""

    def __init__(self, field_errors: Dict[str, List[str]]):
        self.field_errors = field_errors
        fields = ", ".join(sorted(field_errors)) or "input"
        super().__init__(f"Invalid fields: {fields}")

    @property
    def fields(self) -> List[str]:
        return sorted(self.field_errors)


class NotFoundError(InvoiceDeskError):
    """A point lookup, update or delete matched no row."""

    def __init__(self, resource: str, key: object = None):
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} not found")


class DataAccessError(InvoiceDeskError):
    """The store failed while running ``operation``."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(message)


def wrap_store_errors(operation: str, message: str):
    """Decorate an async query function so store errors become DataAccessError.

    The original error is logged with the operation name and chained, but
    never copied into the message the caller sees.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as exc:
                logger.error("Database Error in %s: %s", operation, exc, exc_info=True)
                raise DataAccessError(operation, message) from exc

        return wrapper

    return decorator


class BusinessError:
    """HTTP exceptions with safe (non-leaky) messages."""

    @staticmethod
    def unauthorized(reason: str = "") -> HTTPException:
        """
        Generic 401 for all authentication failures.

        Same response for wrong password and unknown user.
        """
        logger.warning(f"Unauthorized access attempt: {reason}")
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
