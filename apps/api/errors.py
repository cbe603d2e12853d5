"""
Exception to HTTP status mapping.

Every endpoint reports failures through this one table; error responses
carry a status code and no body.
"""
import logging
from typing import Dict, Optional, Type

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError

from core.domain.exceptions import (
    ConcurrencyConflictError,
    EntityNotFoundError,
    ValidationError,
)
from apps.api.security import UnauthorizedError

logger = logging.getLogger(__name__)


EXCEPTION_STATUS_CODES: Dict[Type[Exception], int] = {
    RequestValidationError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    EntityNotFoundError: status.HTTP_404_NOT_FOUND,
    ConcurrencyConflictError: status.HTTP_409_CONFLICT,
}


def status_code_for(exc: Exception) -> int:
    """Most specific mapped status for `exc`, 500 when unmapped."""
    for exc_type in type(exc).__mro__:
        if exc_type in EXCEPTION_STATUS_CODES:
            return EXCEPTION_STATUS_CODES[exc_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def exception_to_response(request: Request, exc: Exception) -> Response:
    """Translate `exc` into an empty-bodied response.

    Args:
        request: FastAPI request
        exc: Raised exception

    Returns:
        Response with the mapped status code
    """
    status_code = status_code_for(exc)
    headers: Optional[Dict[str, str]] = None

    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    if status_code >= 500:
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
    else:
        logger.info(
            f"{request.method} {request.url.path} -> {status_code} "
            f"({type(exc).__name__}: {exc})"
        )

    return Response(status_code=status_code, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the mapping on `app`, including the catch-all for 500."""
    for exc_type in EXCEPTION_STATUS_CODES:
        app.add_exception_handler(exc_type, exception_to_response)
    app.add_exception_handler(Exception, exception_to_response)
