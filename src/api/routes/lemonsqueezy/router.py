"""Router do Lemon Squeezy — agrega os endpoints do provedor."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.lemonsqueezy.webhook import router as webhook_router

router = APIRouter()

router.include_router(webhook_router)
