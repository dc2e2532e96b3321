"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from zeebe_ops.api.dependencies import get_health_service
from zeebe_ops.services.health import HealthService

router = APIRouter(tags=["health"])


@router.get("/es/health")
def es_health(service: HealthService = Depends(get_health_service)) -> dict[str, str]:
    return service.probe()
