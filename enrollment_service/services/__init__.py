# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Clients for the collaborator services.

- directory: student directory (user-service)
- catalog: course catalog (catalog-service)
"""

from enrollment_service.services.catalog import CatalogClient, CourseSnapshot
from enrollment_service.services.directory import DirectoryClient
from enrollment_service.services.exceptions import (
    CatalogCourseNotFoundError,
    CatalogUnavailableError,
    DirectoryUnavailableError,
    UpstreamServiceError,
)
from enrollment_service.services.results import CountSyncResult, Lookup, LookupStatus

__all__ = [
    "CatalogClient",
    "CourseSnapshot",
    "DirectoryClient",
    "CatalogCourseNotFoundError",
    "CatalogUnavailableError",
    "DirectoryUnavailableError",
    "UpstreamServiceError",
    "CountSyncResult",
    "Lookup",
    "LookupStatus",
]
