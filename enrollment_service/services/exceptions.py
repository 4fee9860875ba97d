# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Custom exceptions for the collaborator service clients.

This module defines the exception hierarchy for upstream HTTP calls:
- UpstreamServiceError: Base exception for collaborator errors
- DirectoryUnavailableError: Student directory unreachable or unusable
- CatalogUnavailableError: Course catalog unreachable or unusable
- CatalogCourseNotFoundError: Catalog answered that the course does not exist
"""


class UpstreamServiceError(Exception):
    """Base exception for all collaborator service errors.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from the collaborator, if any.
        details: Optional dictionary with additional error context.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        """Initialize upstream service error.

        Args:
            message: Human-readable error description.
            status_code: HTTP status code from the collaborator, if any.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with status code."""
        base = self.message
        if self.status_code:
            base = f"[{self.status_code}] {base}"
        if self.details:
            base = f"{base} - Details: {self.details}"
        return base


class DirectoryUnavailableError(UpstreamServiceError):
    """Student directory could not give a usable answer.

    Raised for timeouts, connection errors, 5xx responses and malformed
    bodies. A well-formed "not found" is never reported this way.
    """


class CatalogUnavailableError(UpstreamServiceError):
    """Course catalog could not give a usable answer."""


class CatalogCourseNotFoundError(UpstreamServiceError):
    """Catalog answered that no course has the requested code.

    Attributes:
        course_code: The code that was looked up.
    """

    def __init__(self, course_code: str, status_code: int | None = 404):
        self.course_code = course_code
        super().__init__(
            message=f"Course not found: {course_code}",
            status_code=status_code,
        )
