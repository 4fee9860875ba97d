# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides student enrollment management functionality including:
- Enrollment with directory and catalog validation
- Enrollment withdrawal (drop)
- Enrollment queries and active counts
"""

from enrollment_service.domains.enrollment.exceptions import (
    CourseFullError,
    CourseNotFoundError,
    DuplicateEnrollmentError,
    EnrollmentConflictError,
    EnrollmentLookupError,
    EnrollmentNotActiveError,
    EnrollmentNotFoundError,
    EnrollmentServiceError,
    EnrollmentValidationError,
    StudentNotFoundError,
    UpstreamUnavailableError,
)
from enrollment_service.domains.enrollment.repository import (
    DuplicateActiveEnrollmentError,
    EnrollmentRepository,
)
from enrollment_service.domains.enrollment.service import EnrollmentService

__all__ = [
    "EnrollmentService",
    "EnrollmentRepository",
    "DuplicateActiveEnrollmentError",
    "EnrollmentServiceError",
    "EnrollmentValidationError",
    "EnrollmentLookupError",
    "StudentNotFoundError",
    "CourseNotFoundError",
    "EnrollmentNotFoundError",
    "EnrollmentConflictError",
    "CourseFullError",
    "DuplicateEnrollmentError",
    "EnrollmentNotActiveError",
    "UpstreamUnavailableError",
]
