# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Call-time configuration values for extraction and truncation.

Everything here is an explicit, immutable value handed to the core at call
time. The core never reads environment variables; entry points (cli.py)
translate environment and flags into these objects.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from webtrim.errors import ConfigError


class TruncationMode(StrEnum):
    """Named output budgets."""

    COMPACT = "compact"
    STANDARD = "standard"
    FULL = "full"


class ContentFormat(StrEnum):
    """Shape of the content handed to the truncation engine."""

    MARKDOWN = "markdown"
    TEXT = "text"


MODE_LIMITS: dict[TruncationMode, float] = {
    TruncationMode.COMPACT: 3000,
    TruncationMode.STANDARD: 8000,
    TruncationMode.FULL: math.inf,
}

DEFAULT_MODE = TruncationMode.STANDARD

# ---- Extraction defaults ----
_DEFAULT_IGNORE_PATTERN = r"nav|sidebar|ads|advertisement|footer|header|menu|comment"
# Matched at a word start so "threads" / "downloads" survive but "ads-top",
# "adsbygoogle", "sponsored" and "promo-box" do not.
_DEFAULT_NOISE_PATTERN = r"(?<![a-z])(?:ads|advertisement|sponsor|promo)"
_DEFAULT_MIN_TEXT_LENGTH = 50
_DEFAULT_TAG_BOOSTS = {"article": 1.7, "main": 1.5, "section": 1.3}


def _compile(value: str | re.Pattern[str], name: str) -> re.Pattern[str]:
    if isinstance(value, re.Pattern):
        return value
    try:
        return re.compile(value, re.IGNORECASE)
    except re.error as e:
        raise ConfigError(f"Invalid {name}: {e}") from e


@dataclass(frozen=True)
class ExtractConfig:
    """Tunables for the DOM content scorer.

    Patterns may be given as strings; they are compiled case-insensitively.
    """

    ignore_pattern: re.Pattern[str] | str = _DEFAULT_IGNORE_PATTERN
    min_text_length: int = _DEFAULT_MIN_TEXT_LENGTH
    tag_boosts: Mapping[str, float] = field(default_factory=lambda: dict(_DEFAULT_TAG_BOOSTS), hash=False)
    noise_pattern: re.Pattern[str] | str = _DEFAULT_NOISE_PATTERN

    def __post_init__(self) -> None:
        object.__setattr__(self, "ignore_pattern", _compile(self.ignore_pattern, "ignore_pattern"))
        object.__setattr__(self, "noise_pattern", _compile(self.noise_pattern, "noise_pattern"))
        if isinstance(self.min_text_length, bool) or not isinstance(self.min_text_length, int):
            raise ConfigError(f"min_text_length must be an int, got {self.min_text_length!r}")
        if self.min_text_length < 0:
            raise ConfigError(f"min_text_length must be >= 0, got {self.min_text_length}")
        boosts = {str(tag).lower(): float(factor) for tag, factor in dict(self.tag_boosts).items()}
        if any(factor < 0 for factor in boosts.values()):
            raise ConfigError("tag_boosts factors must be >= 0")
        object.__setattr__(self, "tag_boosts", boosts)

    def boost_for(self, tag: str) -> float:
        return self.tag_boosts.get(tag, 1.0)


DEFAULT_EXTRACT_CONFIG = ExtractConfig()


def parse_mode(value: str | TruncationMode | None) -> TruncationMode:
    """Resolve a mode name, defaulting to standard when unset."""
    if value is None or value == "":
        return DEFAULT_MODE
    try:
        return TruncationMode(str(value).lower())
    except ValueError:
        allowed = ", ".join(m.value for m in TruncationMode)
        raise ConfigError(f"Unknown truncation mode {value!r} (expected one of: {allowed})") from None


def parse_format(value: str | ContentFormat) -> ContentFormat:
    try:
        return ContentFormat(str(value).lower())
    except ValueError:
        allowed = ", ".join(f.value for f in ContentFormat)
        raise ConfigError(f"Unknown content format {value!r} (expected one of: {allowed})") from None


@dataclass(frozen=True, slots=True)
class TruncationOptions:
    """Budget selection for ``apply_smart_truncation``.

    ``max_length`` wins over ``mode`` when both are given.
    """

    mode: TruncationMode = DEFAULT_MODE
    max_length: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", parse_mode(self.mode))
        if self.max_length is not None:
            if isinstance(self.max_length, bool) or not isinstance(self.max_length, int):
                raise ConfigError(f"max_length must be an int, got {self.max_length!r}")
            if self.max_length < 1:
                raise ConfigError(f"max_length must be >= 1, got {self.max_length}")

    @property
    def budget(self) -> float:
        """Character budget; ``math.inf`` for full mode without max_length."""
        if self.max_length is not None:
            return self.max_length
        return MODE_LIMITS[self.mode]

    @classmethod
    def coerce(cls, value: TruncationOptions | Mapping[str, Any] | None) -> TruncationOptions:
        """Accept an options object, a plain mapping, or None."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            unknown = set(value) - {"mode", "max_length"}
            if unknown:
                raise ConfigError(f"Unknown truncation option(s): {', '.join(sorted(unknown))}")
            return cls(mode=value.get("mode"), max_length=value.get("max_length"))
        raise ConfigError(f"Unsupported options type: {type(value).__name__}")
