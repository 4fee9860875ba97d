# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course catalog HTTP client.

This client talks to the catalog service (catalog-service):

    GET   {base_url}/api/courses/code/{code}  ->  {"data": {"id", "capacity", "enrolled"}}
    PATCH {base_url}/api/courses/{id}          <-  {"enrolled": n}

Course lookups distinguish "no such course" from an unusable answer.
Enrolled-count updates are best-effort: they never raise and report their
outcome as a CountSyncResult.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from enrollment_service.services.catalog.models import CourseSnapshot
from enrollment_service.services.exceptions import (
    CatalogCourseNotFoundError,
    CatalogUnavailableError,
)
from enrollment_service.services.results import CountSyncResult, Lookup

logger = logging.getLogger(__name__)


class CatalogClient:
    """Async HTTP client for the course catalog service.

    Attributes:
        base_url: Base URL of the catalog service.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the catalog client.

        Args:
            base_url: Base URL of the catalog service.
            timeout: Request timeout in seconds.
            client: Optional preconfigured httpx client (shared pools, tests).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def lookup_course(self, course_code: str) -> Lookup[CourseSnapshot]:
        """Look up a course by its human-facing code.

        Args:
            course_code: Course code, e.g. "CS101".

        Returns:
            OK(snapshot), NOT_FOUND, or UNAVAILABLE.
        """
        url = f"{self.base_url}/api/courses/code/{quote(course_code, safe='')}"
        logger.debug("Calling catalog service: url=%s", url)

        try:
            response = await self._client.get(url)
        except httpx.TimeoutException as e:
            logger.error("Catalog service timed out: course_code=%s", course_code)
            return Lookup.unavailable(f"Catalog service timed out: {e}")
        except httpx.RequestError as e:
            logger.error("Catalog service connection error: %s", str(e))
            return Lookup.unavailable(f"Failed to connect to catalog service: {e}")

        if response.status_code == 404:
            logger.info("Course not found in catalog: %s", course_code)
            return Lookup.not_found(status_code=404)

        if not response.is_success:
            logger.error(
                "Catalog service returned error: status=%d, course_code=%s",
                response.status_code,
                course_code,
            )
            return Lookup.unavailable(
                f"Catalog service returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            body: Any = response.json()
        except ValueError:
            logger.error("Catalog service returned non-JSON body: course_code=%s", course_code)
            return Lookup.unavailable(
                "Catalog service returned a malformed response",
                status_code=response.status_code,
            )

        if not isinstance(body, dict):
            return Lookup.unavailable(
                "Catalog service returned a malformed response",
                status_code=response.status_code,
            )

        if body.get("code") == 404:
            logger.info("Course not found in catalog: %s", course_code)
            return Lookup.not_found(status_code=response.status_code)

        try:
            snapshot = CourseSnapshot.model_validate(body.get("data"))
        except ValidationError as e:
            logger.error(
                "Catalog service returned invalid course data: course_code=%s, errors=%d",
                course_code,
                e.error_count(),
            )
            return Lookup.unavailable(
                "Catalog service returned invalid course data",
                status_code=response.status_code,
            )

        logger.info(
            "Course resolved: code=%s, course_id=%s, capacity=%d, enrolled=%d",
            course_code,
            snapshot.id,
            snapshot.capacity,
            snapshot.enrolled,
        )
        return Lookup.ok(snapshot)

    async def get_course_by_code(self, course_code: str) -> CourseSnapshot:
        """Get a course snapshot by code.

        Args:
            course_code: Course code, e.g. "CS101".

        Returns:
            The course snapshot.

        Raises:
            CatalogCourseNotFoundError: If the catalog has no such course.
            CatalogUnavailableError: If the catalog gave no usable answer.
        """
        result = await self.lookup_course(course_code)
        if result.is_not_found:
            raise CatalogCourseNotFoundError(course_code, status_code=result.status_code)
        if result.is_unavailable or result.value is None:
            raise CatalogUnavailableError(
                message=result.error or "Catalog service unavailable",
                status_code=result.status_code,
                details={"course_code": course_code},
            )
        return result.value

    async def update_enrolled_count(self, course_id: str, new_count: int) -> CountSyncResult:
        """Push a new enrolled count to the catalog.

        Never raises; failures are returned in the result.

        Args:
            course_id: Catalog-internal course id.
            new_count: The enrolled count to record.

        Returns:
            Outcome of the update.
        """
        url = f"{self.base_url}/api/courses/{quote(course_id, safe='')}"

        try:
            response = await self._client.patch(url, json={"enrolled": new_count})
        except httpx.RequestError as e:
            return CountSyncResult(
                course_id=course_id,
                enrolled=new_count,
                success=False,
                error=f"{type(e).__name__}: {e}",
            )

        if not response.is_success:
            return CountSyncResult(
                course_id=course_id,
                enrolled=new_count,
                success=False,
                error=f"Catalog service returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        return CountSyncResult(
            course_id=course_id,
            enrolled=new_count,
            success=True,
            status_code=response.status_code,
        )

    async def ping(self) -> bool:
        """Check that the catalog service answers HTTP at all."""
        try:
            await self._client.get(f"{self.base_url}/")
            return True
        except httpx.RequestError:
            return False
