# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for the extraction cache."""

from __future__ import annotations

import pytest

from rezlog.cache import ExtractionCache, profile_signature
from rezlog.models import ResidentRecord


@pytest.fixture
def record() -> ResidentRecord:
    return ResidentRecord(full_name="Doe, Jane", identifier="20990921", room_code="UWP-BECK-204a")


@pytest.fixture
def cache(clock) -> ExtractionCache:
    return ExtractionCache(ttl_seconds=30.0, clock=clock)


class TestProfileSignature:
    def test_whitespace_and_case_insensitive(self):
        assert profile_signature("Doe,  Jane ") == profile_signature("doe, jane")

    def test_different_names(self):
        assert profile_signature("Doe, Jane") != profile_signature("Roe, Rick")


class TestExtractionCache:
    def test_empty_miss(self, cache):
        assert cache.get(profile_signature("Doe, Jane")) is None
        assert cache.get_stats()["total_misses"] == 1

    def test_hit_within_ttl(self, cache, clock, record):
        sig = profile_signature("Doe, Jane")
        cache.put(record, sig)
        clock.advance(29.9)
        assert cache.get(sig) == record
        assert cache.peek().hits == 1

    def test_expires_at_ttl(self, cache, clock, record):
        sig = profile_signature("Doe, Jane")
        cache.put(record, sig)
        clock.advance(30.0)
        assert cache.get(sig) is None
        assert cache.peek() is None

    def test_signature_change_discards(self, cache, record):
        cache.put(record, profile_signature("Doe, Jane"))
        assert cache.get(profile_signature("Roe, Rick")) is None
        # the old entry is gone even for the first signature
        assert cache.get(profile_signature("Doe, Jane")) is None
        assert cache.get_stats()["invalidations"] == 1

    def test_invalidate(self, cache, record):
        cache.put(record, "sig")
        cache.invalidate()
        cache.invalidate()
        assert cache.peek() is None
        assert cache.get_stats()["invalidations"] == 1

    def test_put_replaces_entry(self, cache, clock, record):
        cache.put(record, "a")
        clock.advance(20)
        cache.put(record, "a")
        clock.advance(20)
        assert cache.get("a") == record

    def test_stats(self, cache, record):
        cache.put(record, "a")
        cache.get("a")
        cache.get("a")
        cache.get("b")
        stats = cache.get_stats()
        assert stats["total_hits"] == 2
        assert stats["total_misses"] == 1
        assert stats["hit_rate"] == pytest.approx(2 / 3)
        assert stats["cached"] is False
        assert stats["ttl_seconds"] == 30.0
