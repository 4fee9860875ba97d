# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models."""

from enrollment_service.infrastructure.database.models.base import Base, TimestampMixin
from enrollment_service.infrastructure.database.models.enrollment import (
    EXTERNAL_ID_LENGTH,
    Enrollment,
    EnrollmentStatus,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "Enrollment",
    "EnrollmentStatus",
    "EXTERNAL_ID_LENGTH",
]
