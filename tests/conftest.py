# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- In-memory SQLite database sessions
- Fake directory and catalog services served through httpx.MockTransport
"""

import json
from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from enrollment_service.infrastructure.database.models import Base
from enrollment_service.services.catalog import CatalogClient
from enrollment_service.services.directory import DirectoryClient

DIRECTORY_URL = "http://directory.test"
CATALOG_URL = "http://catalog.test"


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite engine with the schema applied."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session bound to the in-memory database."""
    sessionmaker = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with sessionmaker() as session:
        yield session


# =============================================================================
# Fake Collaborator Services
# =============================================================================


@dataclass
class FakeDirectory:
    """In-memory directory service speaking the {code, message, data} envelope."""

    students: set[str] = field(default_factory=set)
    failure: Exception | None = None
    status_code: int = 200
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.failure is not None:
            raise self.failure
        if self.status_code != 200:
            return httpx.Response(self.status_code, text="upstream error")

        student_id = request.url.params.get("studentid")
        if student_id in self.students:
            return httpx.Response(
                200,
                json={"code": 200, "message": "Success", "data": {"studentId": student_id}},
            )
        return httpx.Response(
            200,
            json={"code": 404, "message": "Student not found", "data": None},
        )


@dataclass
class FakeCatalog:
    """In-memory catalog service holding course snapshots keyed by code."""

    courses: dict[str, dict[str, Any]] = field(default_factory=dict)
    failure: Exception | None = None
    patch_failure: Exception | None = None
    patch_status_code: int = 200
    patches: list[tuple[str, int]] = field(default_factory=list)

    def add_course(self, code: str, course_id: str, capacity: int, enrolled: int = 0) -> None:
        self.courses[code] = {
            "id": course_id,
            "code": code,
            "title": f"{code} course",
            "capacity": capacity,
            "enrolled": enrolled,
        }

    def course(self, course_id: str) -> dict[str, Any] | None:
        for course in self.courses.values():
            if course["id"] == course_id:
                return course
        return None

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path

        if request.method == "PATCH" and path.startswith("/api/courses/"):
            if self.patch_failure is not None:
                raise self.patch_failure
            course_id = path.rsplit("/", 1)[-1]
            enrolled = json.loads(request.content)["enrolled"]
            self.patches.append((course_id, enrolled))
            if self.patch_status_code != 200:
                return httpx.Response(self.patch_status_code, text="patch rejected")
            course = self.course(course_id)
            if course is not None:
                course["enrolled"] = enrolled
            return httpx.Response(200, json={"code": 200, "message": "Success", "data": course})

        if self.failure is not None:
            raise self.failure

        if request.method == "GET" and path.startswith("/api/courses/code/"):
            code = path.rsplit("/", 1)[-1]
            course = self.courses.get(code)
            if course is None:
                return httpx.Response(
                    200,
                    json={"code": 404, "message": "Course not found", "data": None},
                )
            return httpx.Response(200, json={"code": 200, "message": "Success", "data": dict(course)})

        return httpx.Response(200, json={"code": 200, "message": "Success", "data": None})


def _client_for(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def fake_directory() -> FakeDirectory:
    """Directory service knowing student S1."""
    return FakeDirectory(students={"S1"})


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    """Catalog service with CS101 (capacity 30, 10 enrolled)."""
    catalog = FakeCatalog()
    catalog.add_course("CS101", "c-101", capacity=30, enrolled=10)
    return catalog


@pytest_asyncio.fixture
async def directory_client(fake_directory) -> AsyncGenerator[DirectoryClient, None]:
    """DirectoryClient wired to the fake directory service."""
    http = _client_for(fake_directory.handler)
    client = DirectoryClient(base_url=DIRECTORY_URL, client=http)
    yield client
    await http.aclose()


@pytest_asyncio.fixture
async def catalog_client(fake_catalog) -> AsyncGenerator[CatalogClient, None]:
    """CatalogClient wired to the fake catalog service."""
    http = _client_for(fake_catalog.handler)
    client = CatalogClient(base_url=CATALOG_URL, client=http)
    yield client
    await http.aclose()


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
