# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the enrollment service.

Example:
    >>> from enrollment_service.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from enrollment_service.core.config.settings import (
    APISettings,
    CatalogServiceSettings,
    CORSSettings,
    DatabaseSettings,
    DirectoryServiceSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "APISettings",
    "CatalogServiceSettings",
    "CORSSettings",
    "DatabaseSettings",
    "DirectoryServiceSettings",
    "Settings",
    "clear_settings_cache",
    "get_settings",
]
