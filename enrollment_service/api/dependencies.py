# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

Dependencies are used to:
- Get database sessions
- Get the collaborator clients built at startup
- Get a per-request EnrollmentService

Example:
    @router.get("/api/enrollments")
    async def list_enrollments(
        service: EnrollmentService = Depends(get_enrollment_service),
    ):
        ...
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from enrollment_service.core.config import Settings, get_settings
from enrollment_service.domains.enrollment import EnrollmentService
from enrollment_service.infrastructure.database.connection import (
    close_database,
    create_tables,
    get_session,
    init_database,
)
from enrollment_service.services.catalog import CatalogClient
from enrollment_service.services.directory import DirectoryClient

logger = logging.getLogger(__name__)

# Collaborator client singletons, built once at startup
_directory_client: DirectoryClient | None = None
_catalog_client: CatalogClient | None = None


async def init_db() -> None:
    """Initialize the database connection and, if configured, create tables."""
    settings = get_settings()

    await init_database(settings)

    if settings.create_tables:
        await create_tables()
        logger.info("Database tables created")


async def close_db() -> None:
    """Close the database connection pool."""
    await close_database()


def init_clients(settings: Settings) -> None:
    """Build the directory and catalog clients from configured base URLs."""
    global _directory_client, _catalog_client

    _directory_client = DirectoryClient(
        base_url=settings.directory_service.url,
        timeout=settings.directory_service.timeout,
    )
    _catalog_client = CatalogClient(
        base_url=settings.catalog_service.url,
        timeout=settings.catalog_service.timeout,
    )
    logger.info(
        "Collaborator clients initialized: directory=%s, catalog=%s",
        settings.directory_service.url,
        settings.catalog_service.url,
    )


async def close_clients() -> None:
    """Close the collaborator clients."""
    global _directory_client, _catalog_client

    if _directory_client:
        await _directory_client.close()
        _directory_client = None
    if _catalog_client:
        await _catalog_client.close()
        _catalog_client = None


def current_directory_client() -> DirectoryClient | None:
    """Return the directory client, or None before startup or after shutdown."""
    return _directory_client


def current_catalog_client() -> CatalogClient | None:
    """Return the catalog client, or None before startup or after shutdown."""
    return _catalog_client


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session.

    Yields:
        AsyncSession for the enrollment database.
    """
    async with get_session() as session:
        yield session


def get_directory_client() -> DirectoryClient:
    """Get the directory client.

    Raises:
        HTTPException: If clients have not been initialized.
    """
    if _directory_client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Directory client not initialized",
        )
    return _directory_client


def get_catalog_client() -> CatalogClient:
    """Get the catalog client.

    Raises:
        HTTPException: If clients have not been initialized.
    """
    if _catalog_client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog client not initialized",
        )
    return _catalog_client


def get_enrollment_service(
    db: AsyncSession = Depends(get_db),
    directory: DirectoryClient = Depends(get_directory_client),
    catalog: CatalogClient = Depends(get_catalog_client),
) -> EnrollmentService:
    """Get an enrollment service bound to this request's session."""
    return EnrollmentService(db=db, directory=directory, catalog=catalog)
