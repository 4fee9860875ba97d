"""Enrollment Service.

Manages student course enrollments, validating students against the
directory service and courses against the catalog service before
committing a change.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
