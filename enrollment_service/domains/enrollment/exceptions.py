# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain exceptions.

Each exception carries the HTTP status the API reports for it:

- EnrollmentValidationError: bad or missing input (400)
- StudentNotFoundError, CourseNotFoundError, EnrollmentNotFoundError (404)
- CourseFullError, DuplicateEnrollmentError, EnrollmentNotActiveError (400)
- UpstreamUnavailableError: a collaborator could not answer (503)
"""


class EnrollmentServiceError(Exception):
    """Base exception for enrollment service errors.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status reported to API callers.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EnrollmentValidationError(EnrollmentServiceError):
    """Raised when request input is missing or malformed."""

    status_code = 400


class EnrollmentLookupError(EnrollmentServiceError):
    """Base for errors where a referenced entity does not exist."""

    status_code = 404


class StudentNotFoundError(EnrollmentLookupError):
    """Raised when the directory reports that the student does not exist."""

    def __init__(self, student_id: str) -> None:
        self.student_id = student_id
        super().__init__(f"Student not found: {student_id}")


class CourseNotFoundError(EnrollmentLookupError):
    """Raised when the catalog reports that the course code does not exist."""

    def __init__(self, course_code: str) -> None:
        self.course_code = course_code
        super().__init__(f"Course not found: {course_code}")


class EnrollmentNotFoundError(EnrollmentLookupError):
    """Raised when no enrollment has the given id."""

    def __init__(self, enrollment_id: str) -> None:
        self.enrollment_id = enrollment_id
        super().__init__(f"Enrollment not found: {enrollment_id}")


class EnrollmentConflictError(EnrollmentServiceError):
    """Base for requests that conflict with current enrollment state."""

    status_code = 400


class CourseFullError(EnrollmentConflictError):
    """Raised when the course has no seat left."""

    def __init__(self, course_id: str, capacity: int, enrolled: int) -> None:
        self.course_id = course_id
        self.capacity = capacity
        self.enrolled = enrolled
        super().__init__(f"Course is full: {enrolled}/{capacity} seats taken")


class DuplicateEnrollmentError(EnrollmentConflictError):
    """Raised when the student already has an ACTIVE enrollment in the course."""

    def __init__(self, course_id: str, student_id: str) -> None:
        self.course_id = course_id
        self.student_id = student_id
        super().__init__("Student is already enrolled in this course")


class EnrollmentNotActiveError(EnrollmentConflictError):
    """Raised when dropping an enrollment that is not ACTIVE."""

    def __init__(self, enrollment_id: str, status: str) -> None:
        self.enrollment_id = enrollment_id
        self.status = status
        super().__init__(f"Enrollment is not active: {enrollment_id} ({status})")


class UpstreamUnavailableError(EnrollmentServiceError):
    """Raised when the directory or catalog service cannot be used."""

    status_code = 503

    def __init__(self, service: str, reason: str | None = None) -> None:
        self.service = service
        self.reason = reason
        message = f"{service} service unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
