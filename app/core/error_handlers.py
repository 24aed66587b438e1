"""
Exception handlers translating failures into the JSON error envelope.

Every error response has the shape::

    {"error": {"message", "code", "details", "type"}, "request_id": ...}
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config.logging import get_logger
from app.core.exceptions import BaseAppException, ErrorCode, ValidationError
from app.core.middleware import get_request_id

logger = get_logger(__name__)


def _envelope(request: Request, exc: BaseAppException) -> JSONResponse:
    content = exc.to_dict()
    content["request_id"] = get_request_id(request)
    return JSONResponse(status_code=exc.status_code, content=content)


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"{exc.error_code.value}: {exc.message}",
        extra={
            "request_id": get_request_id(request),
            "path": request.url.path,
            "status_code": exc.status_code,
        },
    )
    return _envelope(request, exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors = {}
    for error in exc.errors():
        field_path = ".".join(str(part) for part in error.get("loc", ()))
        field_errors[field_path] = {"message": error.get("msg"), "type": error.get("type")}

    logger.info(
        f"Request validation failed: {len(field_errors)} field(s)",
        extra={"request_id": get_request_id(request), "path": request.url.path},
    )
    return _envelope(
        request,
        ValidationError(message="Request validation failed", details={"field_errors": field_errors}),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error: {exc}",
        exc_info=exc,
        extra={"request_id": get_request_id(request), "path": request.url.path},
    )
    return _envelope(
        request,
        BaseAppException(
            message="Internal server error",
            error_code=ErrorCode.INTERNAL_ERROR,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
