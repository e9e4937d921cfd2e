# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rezlog.engine import ExtractionEngine
from rezlog.settings import EngineConfig, Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REZLOG_LOG_LEVEL", raising=False)
    settings = Settings()
    assert settings.log_level == "WARNING"
    assert settings.engine.cache_ttl_seconds == 30.0
    assert settings.engine.max_consecutive_failures == 5
    assert settings.engine.report_match_threshold == 4


def test_nested_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REZLOG_ENGINE__CACHE_TTL_SECONDS", "5")
    monkeypatch.setenv("REZLOG_RETRY__MAX_ATTEMPTS", "2")
    settings = Settings()
    assert settings.engine.cache_ttl_seconds == 5.0
    assert settings.retry.max_attempts == 2


def test_engine_reads_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REZLOG_ENGINE__KEY_WINDOW_CHARS", "120")
    assert ExtractionEngine().key_filter.window_chars == 120


def test_invalid_ttl() -> None:
    with pytest.raises(ValidationError):
        EngineConfig(cache_ttl_seconds=0)


def test_extra_key_labels_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REZLOG_ENGINE__EXTRA_KEY_LABELS", '["Mailbox"]')
    assert Settings().engine.extra_key_labels == ["Mailbox"]


def test_invalid_log_format() -> None:
    with pytest.raises(ValidationError):
        Settings(log_format="xml")
