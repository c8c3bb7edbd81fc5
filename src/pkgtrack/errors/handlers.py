"""FastAPI exception handlers producing ErrorResponse bodies."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pkgtrack.errors.exceptions import PkgTrackError, ValidationError
from pkgtrack.models.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(request: Request, exc: PkgTrackError) -> JSONResponse:
    trace_id = getattr(request.state, "trace_id", "unknown")
    error_response = ErrorResponse(
        error=ErrorDetail(
            code=exc.code,
            message=exc.message,
            details=exc.details,
            trace_id=trace_id,
            timestamp=datetime.now(timezone.utc),
        ),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app."""

    @app.exception_handler(PkgTrackError)
    async def pkgtrack_error_handler(request: Request, exc: PkgTrackError):
        logger.warning(
            "request_rejected",
            extra={
                "path": request.url.path,
                "method": request.method,
                "code": exc.code,
                "details": exc.details,
            },
        )
        return _error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        wrapped = ValidationError("Request validation failed", details=jsonable_encoder(exc.errors()))
        return _error_response(request, wrapped)
