# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Application settings."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from rezlog.constants import (
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_KEY_WINDOW_CHARS,
    DEFAULT_MAX_CONSECUTIVE_FAILURES,
    DEFAULT_PROFILE_WINDOW_CHARS,
    DEFAULT_REPORT_MATCH_THRESHOLD,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_BACKOFF,
    DEFAULT_RETRY_INITIAL_DELAY_S,
    DEFAULT_REZ360_WINDOW_CHARS,
)


class EngineConfig(BaseModel):
    """Tunables for the extraction engine."""

    cache_ttl_seconds: float = Field(default=DEFAULT_CACHE_TTL_SECONDS, gt=0)
    max_consecutive_failures: int = Field(default=DEFAULT_MAX_CONSECUTIVE_FAILURES, ge=1)
    key_window_chars: int = Field(default=DEFAULT_KEY_WINDOW_CHARS, ge=1)
    report_match_threshold: int = Field(default=DEFAULT_REPORT_MATCH_THRESHOLD, ge=0)
    rez360_window_chars: int = Field(default=DEFAULT_REZ360_WINDOW_CHARS, ge=1)
    profile_window_chars: int = Field(default=DEFAULT_PROFILE_WINDOW_CHARS, ge=1)
    # Site-specific key labels, as regex fragments (e.g. "Mail(?:box)?")
    extra_key_labels: list[str] = Field(default_factory=list)


class RetryConfig(BaseModel):
    """Caller-side retry policy for pages that are still loading."""

    max_attempts: int = Field(default=DEFAULT_RETRY_ATTEMPTS, ge=1)
    initial_delay_seconds: float = Field(default=DEFAULT_RETRY_INITIAL_DELAY_S, ge=0)
    backoff_multiplier: float = Field(default=DEFAULT_RETRY_BACKOFF, ge=1.0)


class Settings(BaseSettings):
    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"
    engine: EngineConfig = Field(default_factory=EngineConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)

    model_config = SettingsConfigDict(
        env_prefix="REZLOG_",
        env_nested_delimiter="__",
        extra="ignore",
    )
