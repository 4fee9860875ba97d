# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment persistence.

EnrollmentRepository is the only component that issues SQL against the
enrollments table. It enforces no business rules; callers check
invariants before saving. The one exception is the partial unique index on
ACTIVE (course_id, student_id), whose violation surfaces as
DuplicateActiveEnrollmentError.
"""

import logging
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from enrollment_service.infrastructure.database.models import Enrollment, EnrollmentStatus

logger = logging.getLogger(__name__)

ACTIVE_UNIQUE_INDEX = "uq_enrollments_active_course_student"


class DuplicateActiveEnrollmentError(Exception):
    """Raised when a save would create a second ACTIVE row for a course/student."""


class EnrollmentRepository:
    """Data access for enrollment records.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_all(self) -> Sequence[Enrollment]:
        result = await self.db.execute(select(Enrollment).order_by(Enrollment.created_at))
        return result.scalars().all()

    async def find_by_course_id(self, course_id: str) -> Sequence[Enrollment]:
        result = await self.db.execute(
            select(Enrollment)
            .where(Enrollment.course_id == course_id)
            .order_by(Enrollment.created_at)
        )
        return result.scalars().all()

    async def find_by_student_id(self, student_id: str) -> Sequence[Enrollment]:
        result = await self.db.execute(
            select(Enrollment)
            .where(Enrollment.student_id == student_id)
            .order_by(Enrollment.created_at)
        )
        return result.scalars().all()

    async def find_by_id(self, enrollment_id: str) -> Enrollment | None:
        return await self.db.get(Enrollment, enrollment_id)

    async def exists_active(self, course_id: str, student_id: str) -> bool:
        """Check for an ACTIVE enrollment of the student in the course."""
        result = await self.db.execute(
            select(Enrollment.id)
            .where(
                Enrollment.course_id == course_id,
                Enrollment.student_id == student_id,
                Enrollment.status == EnrollmentStatus.ACTIVE.value,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def count_active(self, course_id: str) -> int:
        """Count ACTIVE enrollments in a course. DROPPED rows are not counted."""
        result = await self.db.execute(
            select(func.count())
            .select_from(Enrollment)
            .where(
                Enrollment.course_id == course_id,
                Enrollment.status == EnrollmentStatus.ACTIVE.value,
            )
        )
        return int(result.scalar_one())

    async def has_active_by_student_id(self, student_id: str) -> bool:
        """Check whether the student holds any ACTIVE enrollment."""
        result = await self.db.execute(
            select(Enrollment.id)
            .where(
                Enrollment.student_id == student_id,
                Enrollment.status == EnrollmentStatus.ACTIVE.value,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def save(self, enrollment: Enrollment) -> Enrollment:
        """Insert or update an enrollment and commit.

        Args:
            enrollment: New or already-persisted enrollment.

        Returns:
            The persisted enrollment, refreshed from the database.

        Raises:
            DuplicateActiveEnrollmentError: If another ACTIVE enrollment for
                the same course and student already exists.
        """
        course_id, student_id = enrollment.course_id, enrollment.student_id
        self.db.add(enrollment)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            detail = str(e.orig)
            if ACTIVE_UNIQUE_INDEX in detail or "enrollments.course_id, enrollments.student_id" in detail:
                logger.warning(
                    "Active enrollment index rejected insert: course_id=%s, student_id=%s",
                    course_id,
                    student_id,
                )
                raise DuplicateActiveEnrollmentError(
                    f"Active enrollment already exists: course={course_id}, student={student_id}"
                ) from e
            raise

        await self.db.refresh(enrollment)
        return enrollment
