# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import webtrim  # noqa: F401
except ImportError:
    raise ImportError("webtrim is not installed. Run: pip install -e '.[dev]'") from None

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging():
    """CLI tests call logging_config.configure(); keep root logger state per test."""
    root = logging.getLogger()
    old_handlers = root.handlers[:]
    old_level = root.level
    yield
    root.handlers = old_handlers
    root.setLevel(old_level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
