"""Prometheus exposition endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from fieldops.config import Settings, get_settings

router = APIRouter()


@router.get("/metrics", include_in_schema=False)
async def metrics(settings: Settings = Depends(get_settings)) -> Response:
    if not settings.prometheus_enabled:
        raise HTTPException(status_code=404, detail="metrics disabled")
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
