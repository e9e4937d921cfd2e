# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Record-extraction engine.

One engine instance owns one extraction cache and serves one page. Every
call is synchronous, reads only the snapshot it is given and is safe to
repeat; a page that is still loading simply yields a failure result the
caller can retry.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from rezlog.cache import ExtractionCache, profile_signature
from rezlog.extractors import FieldExtractors
from rezlog.keycodes import KeyCodeFilter
from rezlog.logging import get_logger
from rezlog.models import (
    CandidateRecord,
    FailureReason,
    KeyCodeResult,
    ResidentRecord,
    ResidentResult,
    StaffIdentity,
)
from rezlog.patterns import IDENTIFIER_RE, RESIDENT_NAME_RE, key_code_pattern
from rezlog.proximity import anchor_windows
from rezlog.scope.base import TextScope, from_text
from rezlog.scope.resolver import ScopeResolver
from rezlog.settings import EngineConfig, Settings
from rezlog.validator import RecordValidator

logger = get_logger(__name__)


class ExtractionEngine:
    """Recover staff, resident and key-code records from rendered page text."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize engine.

        Args:
            config: Engine tunables (defaults from Settings when None)
            clock: Monotonic time source for the cache

        Raises:
            PatternError: If a configured extra key label does not compile
        """
        self.config = config or Settings().engine
        key_code_re = key_code_pattern(self.config.extra_key_labels)
        self.resolver = ScopeResolver(
            report_match_threshold=self.config.report_match_threshold,
            key_code_re=key_code_re,
        )
        self.extractors = FieldExtractors(rez360_window_chars=self.config.rez360_window_chars)
        self.cache = ExtractionCache(ttl_seconds=self.config.cache_ttl_seconds, clock=clock)
        self.validator = RecordValidator(
            self.cache,
            max_consecutive_failures=self.config.max_consecutive_failures,
        )
        self.key_filter = KeyCodeFilter(self.resolver, window_chars=self.config.key_window_chars)
        self.full_extractions = 0

    # Scope

    def resolve_scope(self, document: TextScope) -> TextScope:
        return self.resolver.resolve_active_scope(document)

    def profile_scope(self, scope: TextScope, resident_name: str) -> TextScope | None:
        """Region identifier and room code may be read from.

        When the active scope (a panel or the whole document) is a listing,
        it is cut down to a bounded window after the resident's name,
        ending at the next different name, so another resident's fields are
        never picked up. Returns None if no such window holds an identifier.
        """
        if not self.resolver.is_report_mode(scope):
            return scope
        windows = anchor_windows(
            scope.text,
            resident_name,
            self.config.profile_window_chars,
            stop=RESIDENT_NAME_RE,
        )
        for window in windows:
            if IDENTIFIER_RE.search(window.text):
                return from_text(window.text)
        logger.info("profile_region_not_found", windows=len(windows))
        return None

    # Staff

    def extract_staff(self, document: TextScope) -> StaffIdentity | None:
        """Staff identity from the analytics payload; None is not an error."""
        name = self.extractors.staff_name(document)
        return StaffIdentity(full_name=name) if name else None

    # Resident

    def resident_name(self, document: TextScope, scope: TextScope | None = None) -> str | None:
        scope = scope or self.resolve_scope(document)
        name = self.extractors.resident_name(scope)
        if name is None and scope is not document:
            name = self.extractors.resident_name(document)
        return name

    def current_signature(self, document: TextScope) -> str | None:
        """Profile signature of what is on screen now, or None if no resident is shown."""
        name = self.resident_name(document)
        return profile_signature(name) if name else None

    def extract_resident(self, document: TextScope) -> ResidentResult:
        """Resident record for the active profile, from cache when the profile is unchanged."""
        scope = self.resolve_scope(document)
        name = self.resident_name(document, scope)
        if not name:
            self.validator.record_failure(["resident name not found"])
            return ResidentResult(error=FailureReason.RESIDENT_NOT_FOUND)

        signature = profile_signature(name)
        cached = self.cache.get(signature)
        if cached is not None:
            logger.debug("resident_cache_hit")
            return ResidentResult(record=cached, from_cache=True)

        return self._extract_fresh(scope, name, signature)

    def _extract_fresh(
        self,
        scope: TextScope,
        name: str,
        signature: str,
    ) -> ResidentResult:
        self.full_extractions += 1
        candidate = CandidateRecord(full_name=name, sources={"full_name": "breadcrumb"})

        region = self.profile_scope(scope, name)
        if region is None:
            self.validator.record_failure(["profile region not found in report view"])
            return ResidentResult(error=FailureReason.IDENTIFIER_NOT_FOUND)

        identifier = self.extractors.identifier.run(region)
        if not identifier.found:
            self.validator.record_failure(["identifier not found"])
            return ResidentResult(error=FailureReason.IDENTIFIER_NOT_FOUND)
        candidate.identifier = identifier.value
        candidate.sources["identifier"] = identifier.strategy or ""

        room = self.extractors.room_code.run(region)
        if not room.found:
            self.validator.record_failure(["room code not found"])
            return ResidentResult(error=FailureReason.ROOM_NOT_FOUND)
        candidate.room_code = room.value
        candidate.sources["room_code"] = room.strategy or ""

        record = self.validator.validate(candidate, signature)
        if record is None:
            return ResidentResult(error=self._failure_for(candidate))
        return ResidentResult(record=record)

    def _failure_for(self, candidate: CandidateRecord) -> FailureReason:
        reasons = " ".join(self.validator.explain(candidate))
        if "identifier" in reasons:
            return FailureReason.IDENTIFIER_NOT_FOUND
        if "room_code" in reasons:
            return FailureReason.ROOM_NOT_FOUND
        return FailureReason.RESIDENT_NOT_FOUND

    # Keys

    def extract_key_codes(
        self,
        document: TextScope,
        record: ResidentRecord | None = None,
    ) -> KeyCodeResult:
        """Current resident's key codes. Always recomputed, never cached."""
        scope = self.resolve_scope(document)
        if record is None:
            resident = self.extract_resident(document)
            if resident.record is None:
                return KeyCodeResult(error=resident.error or FailureReason.RESIDENT_NOT_FOUND)
            record = resident.record
        return self.key_filter.extract(scope, record.full_name, record.identifier)

    # Parcels

    def count_parcels(self, document: TextScope) -> int | None:
        return self.extractors.parcel_count(document)

    # Host notifications

    def notify_identity_changed(self) -> None:
        """Called by the navigation observer when a different profile opened."""
        self.cache.invalidate()
        self.validator.consecutive_failures = 0

    def get_stats(self) -> dict[str, Any]:
        return {
            "full_extractions": self.full_extractions,
            "consecutive_failures": self.validator.consecutive_failures,
            "chain_runs": {chain.field: chain.runs for chain in self.extractors.chains},
            "cache": self.cache.get_stats(),
        }
