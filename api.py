import uvicorn
from config import ApplicationConfig
from src.api.app import create_app

app = create_app(ApplicationConfig)

if __name__ == "__main__":
    # Client IP is recorded on every session; trust X-Forwarded-For from the proxy
    uvicorn.run(
        "api:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.API_PORT,
        proxy_headers=True,
        forwarded_allow_ips="*",
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
    )
