"""
FastAPI exception handlers for structured error responses.

Every error leaves the API as JSON with an "error" message and an
"error_code". Redirects to the master node are the one exception: they are
not errors and carry no body.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import traceback
import logging

from spiget_backend.exceptions.exceptions import (
    SpigetException,
    BadRequestException,
    InternalServerException,
    MasterRedirect,
)
from spiget_backend.settings import settings


logger = logging.getLogger(__name__)


def _include_debug() -> bool:
    return (
        settings.DEBUG_MODE.lower() in ['dev', 'development', 'local']
        and not settings.DISABLE_API_DEBUG_INFO
    )


async def spiget_exception_handler(request: Request, exc: SpigetException) -> JSONResponse:
    """
    Handle SpigetException instances.

    SECURITY NOTE: Debug information (file paths, function names, line numbers)
    is ONLY included when DEBUG_MODE is 'dev', 'development', or 'local'.
    """
    include_debug = _include_debug()
    error_response = exc.to_error_response(include_debug=include_debug)

    log_error(request, exc)

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.to_body(include_debug=include_debug),
        headers=exc.headers or {},
    )


async def master_redirect_handler(request: Request, exc: MasterRedirect) -> RedirectResponse:
    """Send the caller to the master node; 307 keeps method and body."""
    logger.debug(f"Delegating {request.method} {request.url.path} to master")
    return RedirectResponse(url=exc.location, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Convert Pydantic validation errors into a 400 with field details."""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(x) for x in error["loc"][1:])  # Skip 'body'/'path' prefix
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })

    exception = BadRequestException(
        error_code="VAL_002",
        detail={"message": "Request validation failed", "validation_errors": errors},
    )

    logger.warning(
        f"Validation error on {request.method} {request.url.path}",
        extra={"validation_errors": errors},
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=exception.to_error_response().to_body(),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Handle standard HTTPException from Starlette/FastAPI (e.g. unknown routes).
    """
    from spiget_backend.exceptions.exceptions import NotFoundException

    exception_map = {
        status.HTTP_400_BAD_REQUEST: BadRequestException,
        status.HTTP_404_NOT_FOUND: NotFoundException,
    }

    exception_class = exception_map.get(exc.status_code)
    if exception_class is None:
        body = {"error": str(exc.detail), "error_code": f"HTTP_{exc.status_code}"}
        return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))

    spiget_exc = exception_class(
        detail=exc.detail,
        headers=getattr(exc, "headers", None),
    )
    return await spiget_exception_handler(request, spiget_exc)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Logs the full traceback and returns a generic internal server error.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc,
    )

    exception = InternalServerException(
        detail="An unexpected error occurred",
        context={
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        }
    )

    include_debug = _include_debug()
    if include_debug:
        exception.context["traceback"] = traceback.format_exc()

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=exception.to_error_response(include_debug=include_debug).to_body(include_debug=include_debug),
    )


def log_error(request: Request, exception: SpigetException) -> None:
    """Log error with structured information, level chosen by status code."""
    log_data = {
        "error_code": exception.error_code,
        "status_code": exception.status_code,
        "method": request.method,
        "path": request.url.path,
        "function": exception.function_name,
        "context": exception.context,
    }

    if exception.status_code >= 500:
        logger.error(
            f"Server error: {exception.error_code}",
            extra=log_data,
            exc_info=exception,
        )
    elif exception.status_code >= 400:
        logger.warning(
            f"Client error: {exception.error_code}",
            extra=log_data,
        )
    else:
        logger.info(
            f"Error: {exception.error_code}",
            extra=log_data,
        )


def register_exception_handlers(app) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(SpigetException, spiget_exception_handler)
    app.add_exception_handler(MasterRedirect, master_redirect_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Registered custom exception handlers")
