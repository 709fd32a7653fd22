"""Endpoint de liveness do listener de webhook."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()

HEALTH_SERVICE_NAME = "lemonsqueezy-webhook-listener"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — estático, sem autenticação e sem tocar no buffer."""
    return HealthResponse(status="ok", service=HEALTH_SERVICE_NAME)
