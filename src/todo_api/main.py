from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.middleware.base import RequestResponseEndpoint

from src.todo_api.api.router import api_router
from src.todo_api.core.config import Settings, get_settings
from src.todo_api.core.db import create_engine, create_session_factory, ping, wait_for_database
from src.todo_api.core.exceptions import setup_exception_handlers
from src.todo_api.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.todo_api.core.migrations import run_migrations_async

logger = get_logger(__name__)

OPENAPI_TAGS = [
    {"name": "projects", "description": "Project management"},
    {"name": "tasks", "description": "Tasks scoped under a project"},
]


def _attach_engine(app: FastAPI, engine: AsyncEngine) -> None:
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown.

    When no engine was injected, build one from settings, wait for the
    database under the bounded retry policy and bring the schema up to date
    before serving. Failing to connect aborts startup.
    """
    settings: Settings = app.state.settings
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    owns_engine = app.state.engine is None
    if owns_engine:
        engine = create_engine(settings)
        try:
            await wait_for_database(
                engine,
                attempts=settings.database_connect_attempts,
                delay=settings.database_connect_retry_delay,
            )
            if settings.run_migrations_on_startup:
                await run_migrations_async(settings.alembic_config)
        except BaseException:
            await engine.dispose()
            raise
        _attach_engine(app, engine)

    yield

    logger.info("Shutting down")
    if owns_engine:
        await app.state.engine.dispose()
        app.state.engine = None
    logger.info("Shutdown complete")


def create_app(engine: AsyncEngine | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        engine: Database engine to serve from. If omitted, the lifespan creates
            one from settings at startup.
        settings: Settings override, defaults to ``get_settings()``.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Projects and tasks REST API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = None
    if engine is not None:
        _attach_engine(app, engine)

    setup_exception_handlers(app)

    @app.middleware("http")
    async def logging_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind request_id to log context for all requests."""
        clear_request_context()
        bind_request_context(correlation_id.get())
        try:
            return await call_next(request)
        finally:
            clear_request_context()

    # Added last so it is the outermost middleware and sets the id first
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(api_router)

    @app.get("/health", include_in_schema=False)
    async def health(request: Request) -> JSONResponse:
        """Health check with database validation."""
        try:
            await ping(request.app.state.engine)
        except (SQLAlchemyError, OSError) as e:
            return JSONResponse(
                content={"status": "unhealthy", "database": f"unhealthy: {e}"},
                status_code=503,
            )
        return JSONResponse(content={"status": "healthy", "database": "healthy"})

    return app


app = create_app()
