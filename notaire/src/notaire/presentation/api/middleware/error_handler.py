"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from notaire.domain.exceptions import NotaireException
from notaire.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


async def notaire_exception_handler(
    request: Request, exc: NotaireException
) -> JSONResponse:
    """
    Handle Notaire domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    status_code_map = {
        "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "DUPLICATE_IDENTITY": status.HTTP_409_CONFLICT,
        "OWNERSHIP_CONFLICT": status.HTTP_409_CONFLICT,
        "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
        "AUTHENTICATION_ERROR": status.HTTP_401_UNAUTHORIZED,
        "BACKEND_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    }

    status_code = status_code_map.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if status_code >= 500:
        logger.error(
            f"{exc.code} on {request.method} {request.url.path}: {exc.message}"
        )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
        },
    )
