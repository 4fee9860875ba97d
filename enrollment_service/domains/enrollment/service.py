# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment service for managing student course enrollments.

This module provides the EnrollmentService class for:
- Enrolling a student in a course after directory/catalog validation
- Dropping an enrollment
- Read-only enrollment queries

Enroll and unenroll are two-phase: the local record is committed first,
then the catalog's enrolled count is pushed. The push is best-effort; its
outcome is logged and never undoes or fails the committed change.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from enrollment_service.domains.enrollment.exceptions import (
    CourseFullError,
    CourseNotFoundError,
    DuplicateEnrollmentError,
    EnrollmentNotActiveError,
    EnrollmentNotFoundError,
    StudentNotFoundError,
    UpstreamUnavailableError,
)
from enrollment_service.domains.enrollment.repository import (
    DuplicateActiveEnrollmentError,
    EnrollmentRepository,
)
from enrollment_service.infrastructure.database.models import Enrollment, EnrollmentStatus
from enrollment_service.services.catalog import CatalogClient, CourseSnapshot
from enrollment_service.services.directory import DirectoryClient
from enrollment_service.services.results import CountSyncResult

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Service for managing student enrollments.

    One instance serves one request; it holds no state across calls beyond
    its collaborators.

    Attributes:
        db: Async database session.
        repository: Enrollment persistence.
        directory: Student directory client.
        catalog: Course catalog client.
    """

    def __init__(
        self,
        db: AsyncSession,
        directory: DirectoryClient,
        catalog: CatalogClient,
    ) -> None:
        """Initialize enrollment service.

        Args:
            db: Async database session.
            directory: Student directory client.
            catalog: Course catalog client.
        """
        self.db = db
        self.repository = EnrollmentRepository(db)
        self.directory = directory
        self.catalog = catalog

    # =========================================================================
    # Workflow
    # =========================================================================

    async def enroll_student(self, course_code: str, student_id: str) -> Enrollment:
        """Enroll a student in a course.

        Args:
            course_code: Human-facing course code, resolved via the catalog.
            student_id: Directory identifier of the student.

        Returns:
            The persisted ACTIVE enrollment.

        Raises:
            StudentNotFoundError: If the directory has no such student.
            CourseNotFoundError: If the catalog has no such course.
            UpstreamUnavailableError: If either collaborator cannot answer.
            CourseFullError: If the snapshot shows no free seat.
            DuplicateEnrollmentError: If the student is already enrolled.
        """
        logger.info("Starting enrollment: course_code=%s, student_id=%s", course_code, student_id)

        await self._verify_student(student_id)
        course = await self._resolve_course(course_code)

        if course.is_full:
            logger.warning(
                "Course is full: course_id=%s, capacity=%d, enrolled=%d",
                course.id,
                course.capacity,
                course.enrolled,
            )
            raise CourseFullError(course.id, course.capacity, course.enrolled)

        if await self.repository.exists_active(course.id, student_id):
            logger.warning(
                "Student already enrolled: student_id=%s, course_id=%s",
                student_id,
                course.id,
            )
            raise DuplicateEnrollmentError(course.id, student_id)

        enrollment = Enrollment(
            course_id=course.id,
            student_id=student_id,
            status=EnrollmentStatus.ACTIVE.value,
        )
        try:
            enrollment = await self.repository.save(enrollment)
        except DuplicateActiveEnrollmentError as e:
            raise DuplicateEnrollmentError(course.id, student_id) from e

        logger.info(
            "Enrollment created: enrollment_id=%s, course_id=%s, student_id=%s",
            enrollment.id,
            course.id,
            student_id,
        )

        await self._sync_enrolled_count(course.id, course.enrolled + 1)
        return enrollment

    async def unenroll_student(self, enrollment_id: str) -> None:
        """Drop an ACTIVE enrollment.

        Args:
            enrollment_id: Enrollment identifier.

        Raises:
            EnrollmentNotFoundError: If no enrollment has this id.
            EnrollmentNotActiveError: If the enrollment is already DROPPED.
        """
        logger.info("Starting unenrollment: enrollment_id=%s", enrollment_id)

        enrollment = await self.repository.find_by_id(enrollment_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(enrollment_id)

        if enrollment.status != EnrollmentStatus.ACTIVE:
            logger.warning(
                "Enrollment is not active: enrollment_id=%s, status=%s",
                enrollment_id,
                enrollment.status,
            )
            raise EnrollmentNotActiveError(enrollment_id, enrollment.status)

        course_id = enrollment.course_id
        enrollment.status = EnrollmentStatus.DROPPED.value
        await self.repository.save(enrollment)
        logger.info("Enrollment dropped: enrollment_id=%s", enrollment_id)

        # Local count is authoritative; the catalog's value may have drifted
        active_count = await self.repository.count_active(course_id)
        await self._sync_enrolled_count(course_id, active_count)

    # =========================================================================
    # Queries
    # =========================================================================

    async def get_all_enrollments(self) -> Sequence[Enrollment]:
        return await self.repository.find_all()

    async def get_enrollments_by_course_id(self, course_id: str) -> Sequence[Enrollment]:
        return await self.repository.find_by_course_id(course_id)

    async def get_enrollments_by_student_id(self, student_id: str) -> Sequence[Enrollment]:
        return await self.repository.find_by_student_id(student_id)

    async def get_course_enrollment_count(self, course_id: str) -> int:
        """Count ACTIVE enrollments in a course, independent of the catalog."""
        return await self.repository.count_active(course_id)

    async def is_student_enrolled(self, course_id: str, student_id: str) -> bool:
        return await self.repository.exists_active(course_id, student_id)

    async def has_student_enrollments(self, student_id: str) -> bool:
        """Check whether the student holds any ACTIVE enrollment."""
        return await self.repository.has_active_by_student_id(student_id)

    # =========================================================================
    # Precondition steps
    # =========================================================================

    async def _verify_student(self, student_id: str) -> None:
        result = await self.directory.lookup_student(student_id)
        if result.is_not_found:
            raise StudentNotFoundError(student_id)
        if result.is_unavailable:
            raise UpstreamUnavailableError("Directory", result.error)

    async def _resolve_course(self, course_code: str) -> CourseSnapshot:
        result = await self.catalog.lookup_course(course_code)
        if result.is_not_found:
            raise CourseNotFoundError(course_code)
        if result.is_unavailable or result.value is None:
            raise UpstreamUnavailableError("Catalog", result.error)
        return result.value

    # =========================================================================
    # Post-commit synchronization
    # =========================================================================

    async def _sync_enrolled_count(self, course_id: str, enrolled: int) -> CountSyncResult:
        """Push the enrolled count to the catalog after a local commit.

        Never raises. The result is logged for observability and returned
        for callers that want to inspect it.
        """
        try:
            result = await self.catalog.update_enrolled_count(course_id, enrolled)
        except Exception as e:
            logger.error(
                "Enrolled count sync raised: course_id=%s, enrolled=%d",
                course_id,
                enrolled,
                exc_info=True,
            )
            return CountSyncResult(
                course_id=course_id,
                enrolled=enrolled,
                success=False,
                error=f"{type(e).__name__}: {e}",
            )

        if result.success:
            logger.info("Enrolled count synced: course_id=%s, enrolled=%d", course_id, enrolled)
        else:
            logger.error(
                "Enrolled count sync failed: course_id=%s, enrolled=%d, error=%s",
                course_id,
                enrolled,
                result.error,
            )
        return result
