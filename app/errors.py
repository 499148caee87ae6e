"""Error taxonomy and the single mapping from errors to HTTP responses."""

from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.models.envelope import ErrorResponse


class WorldAPIError(Exception):
    """Base exception for world database failures."""

    status_code = 500


class DatabaseConnectionError(WorldAPIError):
    """Raised when the database cannot be opened or fails its liveness check."""
    pass


class QueryError(WorldAPIError):
    """Raised when executing a listing query fails."""
    pass


class RowMappingError(WorldAPIError):
    """Raised when a result row cannot be mapped onto its model."""
    pass


def error_message(exc: Exception) -> str:
    """Return the client facing message for an error.

    Args:
        exc: Any raised exception.

    Returns:
        The exception text, or its class name when the text is empty.
    """
    return str(exc) or exc.__class__.__name__


def error_response(exc: Exception) -> tuple[int, dict]:
    """Map an error to the status code and body returned to the client.

    Args:
        exc: Raised exception.

    Returns:
        A ``(status_code, body)`` pair where body is the error envelope.
    """
    if isinstance(exc, WorldAPIError):
        status_code, message = exc.status_code, error_message(exc)
    elif isinstance(exc, StarletteHTTPException):
        status_code, message = exc.status_code, str(exc.detail)
    elif isinstance(exc, RequestValidationError):
        status_code, message = 422, "Invalid request"
    else:
        status_code, message = 500, error_message(exc)
    return status_code, ErrorResponse(error=message).model_dump()
