# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API request/response models."""

from enrollment_service.models.common import ApiResponse
from enrollment_service.models.enrollment import EnrollmentResponse, EnrollStudentRequest

__all__ = ["ApiResponse", "EnrollmentResponse", "EnrollStudentRequest"]
