# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student directory client package."""

from enrollment_service.services.directory.client import DirectoryClient

__all__ = ["DirectoryClient"]
