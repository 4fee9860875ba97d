# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tagged results returned by the collaborator clients.

A collaborator call has three distinct outcomes that callers must not
conflate: the value was found, the collaborator answered "not found", or
the collaborator could not be reached / gave an unusable answer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class LookupStatus(str, Enum):
    """Outcome of a collaborator lookup."""

    OK = "ok"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Result of a single collaborator lookup.

    Attributes:
        status: Which of the three outcomes occurred.
        value: The looked-up value when status is OK.
        error: Description of the failure when status is UNAVAILABLE.
        status_code: HTTP status returned by the collaborator, if any.
    """

    status: LookupStatus
    value: T | None = None
    error: str | None = None
    status_code: int | None = None

    @classmethod
    def ok(cls, value: T) -> "Lookup[T]":
        return cls(status=LookupStatus.OK, value=value)

    @classmethod
    def not_found(cls, status_code: int | None = None) -> "Lookup[T]":
        return cls(status=LookupStatus.NOT_FOUND, status_code=status_code)

    @classmethod
    def unavailable(cls, error: str, status_code: int | None = None) -> "Lookup[T]":
        return cls(status=LookupStatus.UNAVAILABLE, error=error, status_code=status_code)

    @property
    def is_ok(self) -> bool:
        return self.status is LookupStatus.OK

    @property
    def is_not_found(self) -> bool:
        return self.status is LookupStatus.NOT_FOUND

    @property
    def is_unavailable(self) -> bool:
        return self.status is LookupStatus.UNAVAILABLE


@dataclass(frozen=True)
class CountSyncResult:
    """Outcome of pushing an enrolled count to the catalog service.

    Attributes:
        course_id: Catalog course id that was updated.
        enrolled: The count that was pushed.
        success: Whether the catalog accepted the update.
        error: Failure description when success is False.
        status_code: HTTP status returned by the catalog, if any.
    """

    course_id: str
    enrolled: int
    success: bool
    error: str | None = None
    status_code: int | None = None
