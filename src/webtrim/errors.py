# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""webtrim exception hierarchy.

All webtrim-specific errors inherit from WebTrimError, allowing callers
to catch the base class for any webtrim failure or specific subclasses
for targeted handling.
"""

from __future__ import annotations


class WebTrimError(Exception):
    """Base exception for all webtrim errors."""


class ConfigError(WebTrimError):
    """Invalid caller-supplied configuration (mode, budget, patterns)."""


class ExtractionError(WebTrimError):
    """HTML could not be parsed into a usable document.

    Raised internally by the content scorer and converted to a ``None``
    result at the public ``extract()`` boundary.
    """


class InputTooLargeError(WebTrimError):
    """Input exceeds the configured size cap."""

    def __init__(self, message: str, *, size: int = 0, limit: int = 0) -> None:
        super().__init__(message)
        self.size = size
        self.limit = limit
