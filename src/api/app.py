import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .error import ClientError, ServerError
from .utils.jwt import JwtTokenIssuer

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = exc.to_dict()
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = exc.to_dict()
    logger.error(
        f"Server error: {exc.base_error.code} - {exc.base_error.message} "
        f"({request.method} {request.url.path})"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler = app.state.cleanup_scheduler
    if scheduler is not None:
        scheduler.start()
    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.stop()
        close = getattr(app.state.cache_service, "close", None)
        if close is not None:
            await close()


def create_app(ApplicationConfig, cache_service=None, notification_service=None) -> FastAPI:
    from src.adapter.services.session_cleanup_scheduler import SessionCleanupScheduler
    from src.depends import (
        AsyncSessionLocal,
        build_cache_service,
        build_metrics_service,
        build_notification_service,
    )

    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    app = FastAPI(title="Catalog API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Object graph, composed once per process
    app.state.config = ApplicationConfig
    app.state.token_issuer = JwtTokenIssuer.from_config(ApplicationConfig)
    app.state.cache_service = cache_service or build_cache_service(ApplicationConfig)
    app.state.metrics_service = build_metrics_service(ApplicationConfig)
    app.state.notification_service = (
        notification_service or build_notification_service(ApplicationConfig)
    )
    cleanup_scheduler: Optional[SessionCleanupScheduler] = None
    if ApplicationConfig.CLEANUP_ENABLED:
        cleanup_scheduler = SessionCleanupScheduler(
            AsyncSessionLocal,
            app.state.metrics_service,
            app.state.notification_service,
            hour=ApplicationConfig.CLEANUP_CRON_HOUR,
            minute=ApplicationConfig.CLEANUP_CRON_MINUTE,
        )
    app.state.cleanup_scheduler = cleanup_scheduler

    from src.api.routes import auth, health_check, metrics, sessions, user

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(metrics.router, tags=["Metrics"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(user.router, tags=["User"])
    app.include_router(sessions.router, tags=["Sessions"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
