"""
Health check and metrics handlers
"""
from fastapi import APIRouter, HTTPException

from ecommerce_api.api.dependencies import InstrumentRegistryDep, SettingsDep
from ecommerce_api.models.responses import HealthResponse
from ecommerce_api.observability.telemetry import metrics_endpoint

router = APIRouter(prefix="/health", tags=["Health"])
metrics_router = APIRouter(tags=["Health"])


@router.get("", response_model=HealthResponse)
@router.get("/", response_model=HealthResponse, include_in_schema=False)
async def health_check(
    settings: SettingsDep,
    instruments: InstrumentRegistryDep
) -> HealthResponse:
    """Basic health check"""
    return HealthResponse(
        status="healthy",
        version=settings.APP_VERSION,
        metrics_namespace=instruments.namespace
    )


@router.get("/ready", response_model=HealthResponse)
async def readiness_check(
    settings: SettingsDep,
    instruments: InstrumentRegistryDep
) -> HealthResponse:
    """Readiness check for Kubernetes"""
    return HealthResponse(
        status="ready",
        version=settings.APP_VERSION,
        metrics_namespace=instruments.namespace
    )


@metrics_router.get("/metrics", include_in_schema=False)
async def metrics(settings: SettingsDep):
    """prometheus metrics endpoint"""
    if not settings.ENABLE_METRICS:
        raise HTTPException(status_code=404, detail="metrics disabled")
    return metrics_endpoint()
