"""Maps RelayError subclasses, and anything unexpected, to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from voice_relay.domain.models import ErrorBody
from voice_relay.exceptions import (
    AnalysisServiceError,
    ConfigurationError,
    IngestError,
    RelayError,
    StagingError,
    TranscriptionServiceError,
    UploadTooLarge,
)
from voice_relay.logging import setup_logging

logger = setup_logging(__name__)

# Most specific first; the first isinstance match wins.
STATUS_BY_ERROR: tuple[tuple[type[RelayError], int], ...] = (
    (UploadTooLarge, 413),
    (IngestError, 400),
    (StagingError, 500),
    (TranscriptionServiceError, 500),
    (AnalysisServiceError, 500),
    (ConfigurationError, 503),
)


def status_for(error: RelayError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return 500


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Converts a RelayError into ``{error, kind, hint?, status?, code?}``."""
    status_code = status_for(exc)
    log = logger.warning if status_code < 500 else logger.error
    log(
        "Request failed",
        extra={
            "path": request.url.path,
            "kind": exc.kind,
            "error": exc.message,
            "status_code": status_code,
            "provider_status": exc.provider_status,
            "provider_code": exc.provider_code,
        },
    )
    body = ErrorBody.from_error(exc)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
        exc_info=exc,
    )
    body = ErrorBody(error="Internal server error", kind="internal_error")
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
