"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import asyncio
import logging

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings
from shared.database import get_supabase_client

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str


def _ping_database() -> None:
    get_supabase_client().table("users").select("id").limit(1).execute()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports ``degraded`` when the profile store cannot be reached.
    """
    try:
        await asyncio.to_thread(_ping_database)
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        return ReadinessResponse(status="degraded", database="unavailable")
    return ReadinessResponse(status="ready", database="connected")
