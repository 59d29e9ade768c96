from fastapi import APIRouter, Request, Response, status
from prometheus_client import CONTENT_TYPE_LATEST

from libs.result import Error
from src.adapter.services.prometheus_metrics_service import PrometheusMetricsService
from src.api.error import ClientError

router = APIRouter(tags=["Metrics"])


@router.get("/metrics", include_in_schema=False)
async def metrics(request: Request):
    service = request.app.state.metrics_service
    if not isinstance(service, PrometheusMetricsService):
        raise ClientError(
            Error("NOT_FOUND", "Metrics are not exported by this backend"),
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return Response(content=service.render(), media_type=CONTENT_TYPE_LATEST)
