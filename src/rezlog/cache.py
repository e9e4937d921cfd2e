# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Last-validated-record cache keyed by profile identity signature."""

from __future__ import annotations

import hashlib
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from rezlog.constants import DEFAULT_CACHE_TTL_SECONDS
from rezlog.logging import get_logger
from rezlog.models import ResidentRecord

logger = get_logger(__name__)


def profile_signature(display_name: str) -> str:
    """Stable signature of the profile on screen, derived from the resident's display name."""
    normalized = " ".join(display_name.split()).casefold()
    return hashlib.blake2s(normalized.encode("utf-8", errors="replace")).hexdigest()


@dataclass
class CacheEntry:
    """The one cached record with the signature it was captured under."""

    record: ResidentRecord
    signature: str
    captured_at: float
    hits: int = 0


class ExtractionCache:
    """Single-entry cache for the last validated resident record.

    The cache is an optimization, not a source of truth: callers recompute
    the signature from the screen on every call and a hit requires an exact
    signature match inside the TTL.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache.

        Args:
            ttl_seconds: Maximum age of a usable entry
            clock: Monotonic time source (injectable for tests)
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: CacheEntry | None = None
        self._total_hits = 0
        self._total_misses = 0
        self._invalidations = 0

    def get(self, signature: str) -> ResidentRecord | None:
        """Return the cached record if ``signature`` matches and the entry is fresh.

        A signature mismatch means the profile switched: the entry is
        discarded and the call is a plain miss.
        """
        entry = self._entry
        if entry is None:
            self._total_misses += 1
            return None

        if entry.signature != signature:
            logger.debug("cache_signature_changed")
            self._discard()
            self._total_misses += 1
            return None

        age = self._clock() - entry.captured_at
        if age >= self.ttl_seconds:
            logger.debug("cache_expired", age=round(age, 3), ttl=self.ttl_seconds)
            self._discard()
            self._total_misses += 1
            return None

        entry.hits += 1
        self._total_hits += 1
        return entry.record

    def put(self, record: ResidentRecord, signature: str) -> None:
        self._entry = CacheEntry(record=record, signature=signature, captured_at=self._clock())

    def invalidate(self) -> None:
        """Drop the cached entry (profile changed or state looks wedged)."""
        if self._entry is not None:
            logger.info("cache_invalidated")
        self._discard()

    def _discard(self) -> None:
        if self._entry is not None:
            self._invalidations += 1
        self._entry = None

    def peek(self) -> CacheEntry | None:
        """Current entry without freshness checks or hit accounting."""
        return self._entry

    def get_stats(self) -> dict[str, Any]:
        total_requests = self._total_hits + self._total_misses
        hit_rate = self._total_hits / total_requests if total_requests > 0 else 0.0
        return {
            "cached": self._entry is not None,
            "total_hits": self._total_hits,
            "total_misses": self._total_misses,
            "invalidations": self._invalidations,
            "hit_rate": hit_rate,
            "ttl_seconds": self.ttl_seconds,
        }
