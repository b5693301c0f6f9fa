import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.common import field_errors, make_error_response

logger = logging.getLogger(__name__)

ERROR_CODES = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    500: "INTERNAL_ERROR",
}


def validation_error_response(errors, message: str = "Invalid request") -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=make_error_response(
            code="VALIDATION_ERROR",
            message=message,
            details={"errors": [e.model_dump() for e in errors]},
        ),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return validation_error_response(field_errors(exc.errors()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        message, details = exc.detail.get("message", "Request failed"), exc.detail
    else:
        message, details = str(exc.detail), {}
    return JSONResponse(
        status_code=exc.status_code,
        content=make_error_response(
            code=ERROR_CODES.get(exc.status_code, "ERROR"),
            message=message,
            details=details,
        ),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=make_error_response(code="INTERNAL_ERROR", message="Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
