"""Global exception handlers.

Invariants:
    - SnapfeedError -> {"error": {code, message, category}} with the error's status
    - LoginRequired -> 303 to the login page (or the location it carries)
    - RequestValidationError -> 400 with field-level details
    - Exception (catch-all) -> generic 500 body, never internal details
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from snapfeed.core.errors import LoginRequired, ServerError, SnapfeedError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    _register_snapfeed_error_handler(app)
    _register_login_required_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_snapfeed_error_handler(app: FastAPI) -> None:
    @app.exception_handler(SnapfeedError)
    async def snapfeed_error_handler(request: Request, exc: SnapfeedError):
        logger.info(
            "%s on %s: %s", exc.code, request.url.path, exc.message,
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _register_login_required_handler(app: FastAPI) -> None:
    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        return RedirectResponse(exc.location, status_code=status.HTTP_303_SEE_OTHER)


def _register_validation_error_handler(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ServerError().to_response(),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                }
                for e in exc.errors()
            ],
        },
    }
