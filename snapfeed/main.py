"""Snapfeed - FastAPI application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from snapfeed.api.error_handlers import register_error_handlers
from snapfeed.api.routes import api_router
from snapfeed.core.config import Settings, settings as default_settings
from snapfeed.core.observability import setup_logging
from snapfeed.db.session import DatabaseSessionManager
from snapfeed.services.storage_service import LocalStorage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    db_manager: DatabaseSessionManager = app.state.db_manager
    if settings.DATABASE_CREATE_TABLES:
        await db_manager.create_all()
    if await db_manager.health_check():
        logger.info("Database: OK")
    else:
        logger.warning("Database connection failed, check DATABASE_URL")
    logger.info("Running on http://%s:%s | Health: /health | Ready (DB): /ready", settings.HOST, settings.PORT)
    yield
    await db_manager.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.db_manager = DatabaseSessionManager(
        settings.DATABASE_URL,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
    )
    app.state.storage = LocalStorage(settings.UPLOAD_DIR, settings.AVATAR_DIR)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE_DAYS * 24 * 60 * 60,
        same_site="lax",
    )
    register_error_handlers(app)
    app.include_router(api_router)

    # Media served straight from the storage directories
    app.mount("/uploads", StaticFiles(directory=str(app.state.storage.upload_dir)), name="uploads")
    app.mount("/avatars", StaticFiles(directory=str(app.state.storage.avatar_dir)), name="avatars")

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/ready")
    async def ready():
        """Health check including DB."""
        if await app.state.db_manager.health_check():
            return {"status": "ok", "database": "connected"}
        return JSONResponse(status_code=503, content={"status": "error", "database": "unavailable"})

    return app


app = create_app()
