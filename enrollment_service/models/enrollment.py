# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment API models.

JSON field names are camelCase (courseCode, studentId, ...); Python
attributes stay snake_case.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from enrollment_service.infrastructure.database.models import EXTERNAL_ID_LENGTH


class EnrollStudentRequest(BaseModel):
    """Body of POST /api/enrollments.

    Both fields are optional at the schema level so that a missing field is
    reported with the service's own 400 message instead of a schema error.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    course_code: str | None = Field(
        None,
        max_length=EXTERNAL_ID_LENGTH,
        description="Human-facing course code, e.g. CS101",
    )
    student_id: str | None = Field(
        None,
        max_length=EXTERNAL_ID_LENGTH,
        description="Directory identifier of the student",
    )


class EnrollmentResponse(BaseModel):
    """Enrollment as returned by the API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    course_id: str = Field(description="Catalog-internal course id")
    student_id: str
    status: str = Field(description="ACTIVE or DROPPED")
    created_at: datetime | None = None
    updated_at: datetime | None = None
