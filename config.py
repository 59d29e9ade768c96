import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./catalog.db")
    MIGRATION_DB_URI = data.get("MIGRATION_DB_URI", "sqlite:///./catalog.db")
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    CACHE_BACKEND = data.get("CACHE_BACKEND", "redis")
    READ_CACHE_TTL_SECONDS = int(data.get("READ_CACHE_TTL_SECONDS", 60))

    # Tokens
    ACCESS_TOKEN_SECRET = data.get("ACCESS_TOKEN_SECRET", "dev-access-secret-change-in-production")
    REFRESH_TOKEN_SECRET = data.get("REFRESH_TOKEN_SECRET", "dev-refresh-secret-change-in-production")
    TOKEN_ISSUER = data.get("TOKEN_ISSUER", "catalog-api")
    ACCESS_TOKEN_EXPIRES_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRES_MINUTES", 15))
    REFRESH_TOKEN_EXPIRES_DAYS = int(data.get("REFRESH_TOKEN_EXPIRES_DAYS", 7))

    # Sessions
    SESSION_LIMIT = int(data.get("SESSION_LIMIT", 5))
    CLEANUP_ENABLED = bool(data.get("CLEANUP_ENABLED", False))
    CLEANUP_CRON_HOUR = int(data.get("CLEANUP_CRON_HOUR", 3))
    CLEANUP_CRON_MINUTE = int(data.get("CLEANUP_CRON_MINUTE", 0))

    # Metrics
    METRICS_BACKEND = data.get("METRICS_BACKEND", "prometheus")

    # Notifications
    NOTIFICATION_BACKEND = data.get("NOTIFICATION_BACKEND", "console")
    NOTIFICATION_WEBHOOK_URL = data.get("NOTIFICATION_WEBHOOK_URL", "")
