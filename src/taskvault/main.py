"""
FastAPI application for TaskVault
Wires settings, logging, routers and the error envelope together
"""
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.responses import fail, ok
from .api.routes import auth, tasks
from .config import get_settings
from .database.database import create_db_and_tables, get_engine
from .utils.errors import AppError, InternalError, ValidationFailedError
from .utils.logging import get_logger, log_error, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables(get_engine())
    logger.info("TaskVault started")
    yield


def create_app() -> FastAPI:
    """
    Build the application.

    Settings are validated here so a bad environment stops the process at
    startup rather than on the first request.
    """
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="TaskVault", lifespan=lifespan)
    app.include_router(auth.router)
    app.include_router(tasks.router)

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        if isinstance(exc, InternalError):
            log_error(exc, f"{request.method} {request.url.path}")
            return fail(exc.status_code, InternalError.default_message, InternalError.code)
        return fail(exc.status_code, exc.message, exc.code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.debug("Validation failed for %s %s: %s", request.method, request.url.path, exc.errors())
        return fail(400, ValidationFailedError.default_message, ValidationFailedError.code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        # Unknown routes, wrong methods and the like
        return fail(exc.status_code, str(exc.detail), HTTPStatus(exc.status_code).name)

    @app.middleware("http")
    async def catch_unexpected_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            log_error(e, f"{request.method} {request.url.path}")
            return fail(500, InternalError.default_message, InternalError.code)

    @app.get("/health", tags=["health"])
    def health():
        return ok({"status": "ok"})

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("taskvault.main:create_app", factory=True, host="0.0.0.0", port=8000)
