import logging

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.logging_metrics_service import LoggingMetricsService
from src.adapter.services.memory_cache_service import InMemoryCacheService
from src.adapter.services.notification_services import (
    ConsoleNotificationService,
    WebhookNotificationService,
)
from src.adapter.services.prometheus_metrics_service import PrometheusMetricsService
from src.adapter.services.redis_cache_service import RedisCacheService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.context import get_client_context
from src.api.utils.jwt import JwtTokenIssuer
from src.app.services.cache_service import ICacheService
from src.app.services.metrics_service import IMetricsService
from src.app.services.notification_service import INotificationService

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


def build_cache_service(config) -> ICacheService:
    if config.CACHE_BACKEND == "memory":
        return InMemoryCacheService()
    return RedisCacheService(config.REDIS_URL)


def build_metrics_service(config) -> IMetricsService:
    if config.METRICS_BACKEND == "console":
        return LoggingMetricsService()
    return PrometheusMetricsService()


def build_notification_service(config) -> INotificationService:
    if config.NOTIFICATION_BACKEND == "webhook" and config.NOTIFICATION_WEBHOOK_URL:
        return WebhookNotificationService(config.NOTIFICATION_WEBHOOK_URL)
    return ConsoleNotificationService()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_cache_service(request: Request) -> ICacheService:
    return request.app.state.cache_service


def get_token_issuer(request: Request) -> JwtTokenIssuer:
    return request.app.state.token_issuer


def get_config(request: Request):
    return request.app.state.config


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    token_issuer: JwtTokenIssuer = Depends(get_token_issuer),
) -> dict:
    """
    Dependency to extract and verify the access token from the Authorization header.

    The token must be bound to the caller's User-Agent.

    Returns:
        Decoded JWT payload containing userId

    Raises:
        ClientError: 401 if token is missing, invalid or expired
    """
    if credentials is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Missing bearer token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    payload = token_issuer.verify_access(
        credentials.credentials,
        audience=get_client_context(request).user_agent,
    )

    if payload is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return payload
