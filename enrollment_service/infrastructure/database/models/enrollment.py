# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment model.

An enrollment links a student (directory service id) to a course (catalog
service internal id, not the human-facing course code). Records move from
ACTIVE to DROPPED and are never deleted; dropped rows stay as history.
"""

from enum import Enum
from uuid import uuid4

from sqlalchemy import CheckConstraint, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from enrollment_service.infrastructure.database.models.base import Base, TimestampMixin

# Widest course or student id accepted from the catalog and directory
EXTERNAL_ID_LENGTH = 255


class EnrollmentStatus(str, Enum):
    """Lifecycle status of an enrollment."""

    ACTIVE = "ACTIVE"
    DROPPED = "DROPPED"


class Enrollment(TimestampMixin, Base):
    """A student's claim on a course seat."""

    __tablename__ = "enrollments"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    course_id: Mapped[str] = mapped_column(String(EXTERNAL_ID_LENGTH), nullable=False, index=True)
    student_id: Mapped[str] = mapped_column(String(EXTERNAL_ID_LENGTH), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=EnrollmentStatus.ACTIVE.value,
    )

    __table_args__ = (
        # At most one ACTIVE row per (course, student); DROPPED rows are unconstrained
        Index(
            "uq_enrollments_active_course_student",
            "course_id",
            "student_id",
            unique=True,
            postgresql_where=text("status = 'ACTIVE'"),
            sqlite_where=text("status = 'ACTIVE'"),
        ),
        CheckConstraint("status IN ('ACTIVE', 'DROPPED')", name="ck_enrollments_status"),
    )

    @property
    def is_active(self) -> bool:
        """Check whether the enrollment currently holds a seat."""
        return self.status == EnrollmentStatus.ACTIVE

    def __repr__(self) -> str:
        return (
            f"<Enrollment(id={self.id}, course_id={self.course_id}, "
            f"student_id={self.student_id}, status={self.status})>"
        )
