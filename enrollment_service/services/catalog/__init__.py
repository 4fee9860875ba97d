# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course catalog client package."""

from enrollment_service.services.catalog.client import CatalogClient
from enrollment_service.services.catalog.models import CourseSnapshot

__all__ = ["CatalogClient", "CourseSnapshot"]
