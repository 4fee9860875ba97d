# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student directory HTTP client.

This client talks to the directory service (user-service) to check that a
student exists before an enrollment is created:

    GET {base_url}/api/students?studentid={id}  ->  {"code": 200, "data": {...}}

A 404 (as HTTP status or as the envelope code) is a legitimate "no such
student" answer. Every other failure (timeout, connection error, 5xx,
unparseable body) is reported as unavailable so callers never mistake an
outage for a missing student.

Example:
    client = DirectoryClient(base_url="http://user-service", timeout=5.0)
    result = await client.lookup_student("S1")
    if result.is_ok:
        ...
"""

import logging
from typing import Any

import httpx

from enrollment_service.services.exceptions import DirectoryUnavailableError
from enrollment_service.services.results import Lookup

logger = logging.getLogger(__name__)

STUDENT_FOUND_CODE = 200
STUDENT_NOT_FOUND_CODE = 404


class DirectoryClient:
    """Async HTTP client for the student directory service.

    Attributes:
        base_url: Base URL of the directory service.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the directory client.

        Args:
            base_url: Base URL of the directory service.
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

    async def lookup_student(self, student_id: str) -> Lookup[bool]:
        """Look up a student in the directory.

        Args:
            student_id: Directory identifier of the student.

        Returns:
            OK(True) if the student exists, NOT_FOUND if the directory says
            it does not, UNAVAILABLE for any other outcome.
        """
        url = f"{self.base_url}/api/students"
        logger.debug("Calling directory service: url=%s, student_id=%s", url, student_id)

        try:
            response = await self._client.get(url, params={"studentid": student_id})
        except httpx.TimeoutException as e:
            logger.error("Directory service timed out: student_id=%s", student_id)
            return Lookup.unavailable(f"Directory service timed out: {e}")
        except httpx.RequestError as e:
            logger.error("Directory service connection error: %s", str(e))
            return Lookup.unavailable(f"Failed to connect to directory service: {e}")

        if response.status_code == 404:
            logger.info("Student not found in directory: %s", student_id)
            return Lookup.not_found(status_code=404)

        if not response.is_success:
            logger.error(
                "Directory service returned error: status=%d, student_id=%s",
                response.status_code,
                student_id,
            )
            return Lookup.unavailable(
                f"Directory service returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        code = self._envelope_code(response)
        if code is None:
            logger.error("Directory service returned malformed body: student_id=%s", student_id)
            return Lookup.unavailable(
                "Directory service returned a malformed response",
                status_code=response.status_code,
            )

        if code == STUDENT_FOUND_CODE:
            logger.info("Student verified: %s", student_id)
            return Lookup.ok(True)

        if code == STUDENT_NOT_FOUND_CODE:
            logger.info("Student not found in directory: %s", student_id)
            return Lookup.not_found(status_code=response.status_code)

        logger.error("Directory service returned code %s: student_id=%s", code, student_id)
        return Lookup.unavailable(
            f"Directory service returned code {code}",
            status_code=response.status_code,
        )

    async def student_exists(self, student_id: str) -> bool:
        """Check whether a student exists.

        Args:
            student_id: Directory identifier of the student.

        Returns:
            True if the student exists, False if the directory says it does not.

        Raises:
            DirectoryUnavailableError: If the directory gave no usable answer.
        """
        result = await self.lookup_student(student_id)
        if result.is_unavailable:
            raise DirectoryUnavailableError(
                message=result.error or "Directory service unavailable",
                status_code=result.status_code,
                details={"student_id": student_id},
            )
        return result.is_ok

    async def ping(self) -> bool:
        """Check that the directory service answers HTTP at all.

        Any response, including an error status, counts as reachable.
        """
        try:
            await self._client.get(f"{self.base_url}/")
            return True
        except httpx.RequestError:
            return False

    @staticmethod
    def _envelope_code(response: httpx.Response) -> int | None:
        """Extract the integer ``code`` from a ``{code, message, data}`` body."""
        try:
            body: Any = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        code = body.get("code")
        if isinstance(code, bool) or not isinstance(code, int):
            return None
        return code
