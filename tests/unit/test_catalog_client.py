# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the course catalog client."""

import httpx
import pytest

from enrollment_service.services.catalog import CatalogClient, CourseSnapshot
from enrollment_service.services.exceptions import (
    CatalogCourseNotFoundError,
    CatalogUnavailableError,
)


def make_client(handler) -> CatalogClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CatalogClient(base_url="http://catalog.test", client=http)


def envelope(data, code: int = 200) -> httpx.Response:
    return httpx.Response(200, json={"code": code, "message": "Success", "data": data})


class TestCourseSnapshot:
    """Tests for the CourseSnapshot model."""

    def test_integer_id_is_coerced(self):
        snapshot = CourseSnapshot.model_validate({"id": 7, "capacity": 10, "enrolled": 3})

        assert snapshot.id == "7"
        assert snapshot.is_full is False

    def test_zero_capacity_is_full(self):
        snapshot = CourseSnapshot(id="c-1", capacity=0, enrolled=0)

        assert snapshot.is_full is True

    def test_enrolled_at_capacity_is_full(self):
        snapshot = CourseSnapshot(id="c-1", capacity=30, enrolled=30)

        assert snapshot.is_full is True


class TestLookupCourse:
    """Tests for CatalogClient.lookup_course."""

    @pytest.mark.asyncio
    async def test_course_found(self, catalog_client):
        result = await catalog_client.lookup_course("CS101")

        assert result.is_ok
        assert result.value.id == "c-101"
        assert result.value.capacity == 30
        assert result.value.enrolled == 10
        assert result.value.code == "CS101"

    @pytest.mark.asyncio
    async def test_course_not_found_by_envelope(self, catalog_client):
        result = await catalog_client.lookup_course("NOPE")

        assert result.is_not_found

    @pytest.mark.asyncio
    async def test_course_not_found_by_http_status(self):
        client = make_client(lambda request: httpx.Response(404))

        result = await client.lookup_course("CS101")

        assert result.is_not_found

    @pytest.mark.asyncio
    async def test_course_code_is_path_encoded(self):
        """Test codes with reserved characters stay a single path segment."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return envelope({"id": "c-9", "capacity": 5, "enrolled": 0})

        client = make_client(handler)
        await client.lookup_course("CS 101/A")

        assert seen[0].url.raw_path == b"/api/courses/code/CS%20101%2FA"

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self, catalog_client, fake_catalog):
        fake_catalog.failure = httpx.ReadTimeout("timed out")

        result = await catalog_client.lookup_course("CS101")

        assert result.is_unavailable
        assert "timed out" in result.error

    @pytest.mark.asyncio
    async def test_server_error_is_unavailable(self):
        client = make_client(lambda request: httpx.Response(503))

        result = await client.lookup_course("CS101")

        assert result.is_unavailable
        assert result.status_code == 503

    @pytest.mark.asyncio
    async def test_missing_capacity_is_unavailable(self):
        """Test a course payload without capacity is treated as unusable."""
        client = make_client(lambda request: envelope({"id": "c-1", "enrolled": 0}))

        result = await client.lookup_course("CS101")

        assert result.is_unavailable

    @pytest.mark.asyncio
    async def test_non_json_body_is_unavailable(self):
        client = make_client(lambda request: httpx.Response(200, text="not json"))

        result = await client.lookup_course("CS101")

        assert result.is_unavailable


class TestGetCourseByCode:
    """Tests for CatalogClient.get_course_by_code."""

    @pytest.mark.asyncio
    async def test_returns_snapshot(self, catalog_client):
        course = await catalog_client.get_course_by_code("CS101")

        assert course.id == "c-101"

    @pytest.mark.asyncio
    async def test_not_found_raises(self, catalog_client):
        with pytest.raises(CatalogCourseNotFoundError):
            await catalog_client.get_course_by_code("NOPE")

    @pytest.mark.asyncio
    async def test_unavailable_raises(self, catalog_client, fake_catalog):
        fake_catalog.failure = httpx.ConnectError("connection refused")

        with pytest.raises(CatalogUnavailableError):
            await catalog_client.get_course_by_code("CS101")


class TestUpdateEnrolledCount:
    """Tests for CatalogClient.update_enrolled_count."""

    @pytest.mark.asyncio
    async def test_patch_success(self, catalog_client, fake_catalog):
        result = await catalog_client.update_enrolled_count("c-101", 11)

        assert result.success is True
        assert result.enrolled == 11
        assert fake_catalog.patches == [("c-101", 11)]
        assert fake_catalog.courses["CS101"]["enrolled"] == 11

    @pytest.mark.asyncio
    async def test_rejected_patch_is_reported(self, catalog_client, fake_catalog):
        fake_catalog.patch_status_code = 500

        result = await catalog_client.update_enrolled_count("c-101", 11)

        assert result.success is False
        assert result.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_failure_does_not_raise(self, catalog_client, fake_catalog):
        fake_catalog.patch_failure = httpx.ConnectError("connection refused")

        result = await catalog_client.update_enrolled_count("c-101", 11)

        assert result.success is False
        assert "ConnectError" in result.error
