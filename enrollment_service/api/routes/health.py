# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoints.

This module provides health and readiness endpoints for the API.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from enrollment_service import __version__
from enrollment_service.api import dependencies
from enrollment_service.core.config import get_settings
from enrollment_service.infrastructure.database.connection import check_database_connection
from enrollment_service.services.catalog import CatalogClient
from enrollment_service.services.directory import DirectoryClient

logger = logging.getLogger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class ComponentHealth(BaseModel):
    """Individual component health status."""
    status: str = Field(description="Component status")
    latency_ms: float | None = Field(None, description="Response latency in ms")
    message: str | None = Field(None, description="Additional status message")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")
    database: ComponentHealth


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    ready: bool = Field(description="Whether the service is ready")
    checks: dict[str, Any] = Field(description="Individual check results")


async def check_database() -> ComponentHealth:
    """Check the enrollment database connection."""
    start = time.time()
    if not await check_database_connection():
        logger.error("Database health check failed")
        return ComponentHealth(status="unhealthy", message="Database unreachable")

    latency = (time.time() - start) * 1000
    return ComponentHealth(status="healthy", latency_ms=round(latency, 2))


async def check_collaborator(
    name: str,
    client: DirectoryClient | CatalogClient | None,
) -> ComponentHealth:
    """Check that a collaborator service answers HTTP."""
    if client is None:
        return ComponentHealth(status="unhealthy", message=f"{name} client not initialized")

    start = time.time()
    if not await client.ping():
        logger.warning("%s health check failed", name)
        return ComponentHealth(status="unhealthy", message=f"{name} service unreachable")

    latency = (time.time() - start) * 1000
    return ComponentHealth(status="healthy", latency_ms=round(latency, 2))


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check if the API is alive, reporting database status.

    Collaborator services are not consulted here; see /ready.
    """
    settings = get_settings()
    db_health = await check_database()

    return HealthResponse(
        status="healthy" if db_health.status == "healthy" else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.environment,
        uptime_seconds=int(time.time() - _server_start_time),
        database=db_health,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """Check if the API is ready to accept traffic.

    Returns:
        ReadinessResponse with individual check results.
    """
    components = {
        "database": await check_database(),
        "directory": await check_collaborator("Directory", dependencies.current_directory_client()),
        "catalog": await check_collaborator("Catalog", dependencies.current_catalog_client()),
    }

    checks = {
        name: {"status": health.status, "latency_ms": health.latency_ms}
        for name, health in components.items()
    }
    ready = all(health.status == "healthy" for health in components.values())

    return ReadinessResponse(ready=ready, checks=checks)
