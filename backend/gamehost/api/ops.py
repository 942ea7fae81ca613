"""Operations endpoints: health checks, metrics and the runtime capability table."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from gamehost.domain.runtime.capabilities import capabilities_payload
from gamehost.obs import health
from gamehost.settings import settings

router = APIRouter(prefix="", tags=["ops"])


async def require_metrics_access() -> None:
	if not settings.obs_metrics_public:
		raise HTTPException(status.HTTP_403_FORBIDDEN, detail="forbidden")


@router.get("/health/live")
async def health_live() -> dict:
	return await health.liveness()


@router.get("/health/ready")
async def health_ready() -> Response:
	status_code, payload = await health.readiness()
	return JSONResponse(status_code=status_code, content=payload)


@router.get("/metrics")
async def prometheus_metrics(_: None = Depends(require_metrics_access)) -> Response:
	return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get("/api/runtime/capabilities")
async def runtime_capabilities() -> dict:
	return capabilities_payload()
