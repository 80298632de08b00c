"""Map service failures onto HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.services import (
    ConfigurationError,
    InvalidIncludeError,
    PatentNotFoundError,
    PatentServiceError,
    UpstreamTimeoutError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (InvalidIncludeError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (PatentNotFoundError, status.HTTP_404_NOT_FOUND),
    (UpstreamTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (ConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: PatentServiceError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_502_BAD_GATEWAY


async def handle_service_error(request: Request, exc: PatentServiceError) -> JSONResponse:
    status_code = status_for(exc)
    logger.error("Error handling %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PatentServiceError, handle_service_error)
