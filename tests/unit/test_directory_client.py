# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the student directory client."""

import httpx
import pytest

from enrollment_service.services.directory import DirectoryClient
from enrollment_service.services.exceptions import DirectoryUnavailableError
from enrollment_service.services.results import LookupStatus


def make_client(handler) -> DirectoryClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DirectoryClient(base_url="http://directory.test/", client=http)


class TestLookupStudent:
    """Tests for DirectoryClient.lookup_student."""

    @pytest.mark.asyncio
    async def test_student_found(self, directory_client, fake_directory):
        """Test an envelope with code 200 means the student exists."""
        result = await directory_client.lookup_student("S1")

        assert result.status == LookupStatus.OK
        assert result.value is True
        request = fake_directory.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/api/students"
        assert request.url.params["studentid"] == "S1"

    @pytest.mark.asyncio
    async def test_student_not_found_by_envelope(self, directory_client):
        """Test an envelope with code 404 means the student does not exist."""
        result = await directory_client.lookup_student("S404")

        assert result.is_not_found
        assert result.value is None

    @pytest.mark.asyncio
    async def test_student_not_found_by_http_status(self):
        client = make_client(lambda request: httpx.Response(404, text="missing"))

        result = await client.lookup_student("S1")

        assert result.is_not_found
        assert result.status_code == 404

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self, directory_client, fake_directory):
        """Test a timed out call is reported as unavailable, not not-found."""
        fake_directory.failure = httpx.ConnectTimeout("timed out")

        result = await directory_client.lookup_student("S1")

        assert result.is_unavailable
        assert "timed out" in result.error

    @pytest.mark.asyncio
    async def test_connection_error_is_unavailable(self, directory_client, fake_directory):
        fake_directory.failure = httpx.ConnectError("connection refused")

        result = await directory_client.lookup_student("S1")

        assert result.is_unavailable

    @pytest.mark.asyncio
    async def test_server_error_is_unavailable(self, directory_client, fake_directory):
        fake_directory.status_code = 500

        result = await directory_client.lookup_student("S1")

        assert result.is_unavailable
        assert result.status_code == 500

    @pytest.mark.asyncio
    async def test_malformed_body_is_unavailable(self):
        """Test a 200 response without an envelope code is not trusted."""
        client = make_client(lambda request: httpx.Response(200, text="<html>ok</html>"))

        result = await client.lookup_student("S1")

        assert result.is_unavailable

    @pytest.mark.asyncio
    async def test_unexpected_envelope_code_is_unavailable(self):
        client = make_client(
            lambda request: httpx.Response(200, json={"code": 500, "message": "boom", "data": None})
        )

        result = await client.lookup_student("S1")

        assert result.is_unavailable


class TestStudentExists:
    """Tests for DirectoryClient.student_exists."""

    @pytest.mark.asyncio
    async def test_true_and_false(self, directory_client):
        assert await directory_client.student_exists("S1") is True
        assert await directory_client.student_exists("S2") is False

    @pytest.mark.asyncio
    async def test_unavailable_raises(self, directory_client, fake_directory):
        fake_directory.failure = httpx.ReadTimeout("timed out")

        with pytest.raises(DirectoryUnavailableError) as exc_info:
            await directory_client.student_exists("S1")

        assert exc_info.value.details == {"student_id": "S1"}


class TestPing:
    """Tests for DirectoryClient.ping."""

    @pytest.mark.asyncio
    async def test_any_response_is_reachable(self):
        client = make_client(lambda request: httpx.Response(404))

        assert await client.ping() is True

    @pytest.mark.asyncio
    async def test_connection_error_is_unreachable(self, directory_client, fake_directory):
        fake_directory.failure = httpx.ConnectError("connection refused")

        assert await directory_client.ping() is False
