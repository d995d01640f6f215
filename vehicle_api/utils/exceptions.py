import enum
import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from vehicle_api.utils.response import error_response

logger = logging.getLogger(__name__)


class ErrorCategory(enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"


_STATUS_BY_CATEGORY: dict[ErrorCategory, tuple[int, str]] = {
    ErrorCategory.VALIDATION: (400, "Validation Failed"),
    ErrorCategory.NOT_FOUND: (404, "Not Found"),
    ErrorCategory.BAD_REQUEST: (400, "Bad Request"),
    ErrorCategory.CONFLICT: (409, "Conflict"),
    ErrorCategory.FORBIDDEN: (403, "Forbidden"),
    ErrorCategory.INTERNAL: (500, "Internal Server Error"),
}


class AppException(Exception):
    category = ErrorCategory.BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PayloadValidationError(AppException):
    category = ErrorCategory.VALIDATION

    def __init__(self, errors: list[str], message: str = "Validation errors occurred"):
        super().__init__(message)
        self.errors = errors


class NotFoundError(AppException):
    category = ErrorCategory.NOT_FOUND


class ConflictError(AppException):
    """Duplicate registration number detected by the service layer."""

    category = ErrorCategory.BAD_REQUEST


class AccessDeniedError(AppException):
    category = ErrorCategory.FORBIDDEN


def build_error_response(
    category: ErrorCategory,
    message: str,
    path: str,
    errors: list[str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    status_code, label = _STATUS_BY_CATEGORY[category]
    return JSONResponse(
        status_code=status_code,
        content=error_response(status_code, label, message, path, errors),
        headers=headers,
    )


_CATEGORY_BY_STATUS = {
    404: ErrorCategory.NOT_FOUND,
    403: ErrorCategory.FORBIDDEN,
    409: ErrorCategory.CONFLICT,
    400: ErrorCategory.BAD_REQUEST,
}


def _http_error_response(exc: StarletteHTTPException, path: str) -> JSONResponse:
    category = _CATEGORY_BY_STATUS.get(exc.status_code)
    if category is not None:
        return build_error_response(category, str(exc.detail), path, headers=exc.headers)
    # routing statuses with no category of their own, e.g. 405
    label = HTTPStatus(exc.status_code).phrase
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.status_code, label, str(exc.detail), path),
        headers=exc.headers,
    )


def _format_request_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error['msg']}" if location else error["msg"]


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return build_error_response(
            exc.category,
            exc.message,
            request.url.path,
            getattr(exc, "errors", None),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _http_error_response(exc, request.url.path)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return build_error_response(
            ErrorCategory.VALIDATION,
            "Validation errors occurred",
            request.url.path,
            [_format_request_error(error) for error in exc.errors()],
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger.warning("Storage constraint violated on %s %s: %s", request.method, request.url.path, exc.orig)
        return build_error_response(
            ErrorCategory.CONFLICT,
            str(exc.orig) if exc.orig is not None else str(exc),
            request.url.path,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return build_error_response(
            ErrorCategory.INTERNAL,
            "An unexpected error occurred",
            request.url.path,
        )
