# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ASGI entry point.

Run with ``uvicorn enrollment_service.main:app`` or the ``enrollment-service``
console script.
"""

import uvicorn

from enrollment_service.api import create_app
from enrollment_service.core.config import get_settings

app = create_app()


def run() -> None:
    """Serve the application with uvicorn using API settings."""
    settings = get_settings()
    uvicorn.run(
        "enrollment_service.main:app",
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
