# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Data models for the course catalog client."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from enrollment_service.infrastructure.database.models import EXTERNAL_ID_LENGTH


class CourseSnapshot(BaseModel):
    """Point-in-time view of a catalog course.

    The catalog owns capacity and the enrolled count; this service only
    reads them and pushes enrolled-count updates back.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(max_length=EXTERNAL_ID_LENGTH, description="Catalog-internal course id")
    capacity: int = Field(ge=0, description="Maximum number of active enrollments")
    enrolled: int = Field(ge=0, description="Enrolled count as last recorded by the catalog")
    code: str | None = Field(None, description="Human-facing course code")
    title: str | None = Field(None, description="Course title")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        """Accept numeric ids from catalogs that use integer keys."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def is_full(self) -> bool:
        """Check whether no seat is left (also true when capacity is 0)."""
        return self.enrolled >= self.capacity
