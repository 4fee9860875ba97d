# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Response envelope shared by every endpoint.

Every response body, success or failure, has the shape
``{"code": int, "message": str, "data": ...}`` where ``code`` mirrors the
HTTP status.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform API response envelope."""

    code: int = Field(200, description="Status code, mirrors the HTTP status")
    message: str = Field("Success", description="Human-readable outcome")
    data: T | None = Field(None, description="Payload, null on errors")

    @classmethod
    def success(cls, data: T | None = None, message: str = "Success", code: int = 200) -> "ApiResponse[T]":
        return cls(code=code, message=message, data=data)

    @classmethod
    def no_content(cls, message: str) -> "ApiResponse[T]":
        return cls(code=200, message=message, data=None)

    @classmethod
    def error(cls, code: int, message: str) -> "ApiResponse[T]":
        return cls(code=code, message=message, data=None)
