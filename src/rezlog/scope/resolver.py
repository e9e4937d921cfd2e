# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Active-scope resolution and report-mode detection."""

from __future__ import annotations

import re

from pydantic import BaseModel

from rezlog.chain import FallbackChain
from rezlog.constants import DEFAULT_REPORT_MATCH_THRESHOLD
from rezlog.logging import get_logger
from rezlog.patterns import (
    ID_COLUMN_RE,
    IDENTIFIER_RE,
    KEY_CODE_RE,
    NAME_COLUMN_RE,
    REPORT_TITLE_RE,
    iter_key_codes,
)
from rezlog.scope.base import TextScope

logger = get_logger(__name__)

# Two different residents' identifiers in one scope means a listing.
MIN_LISTING_IDENTIFIERS = 2


class ReportSignals(BaseModel):
    """The independent report-mode signals for one scope."""

    title: bool = False
    paired_columns: bool = False
    key_matches: int = 0
    identifiers: int = 0
    threshold: int = DEFAULT_REPORT_MATCH_THRESHOLD

    @property
    def match_count_exceeded(self) -> bool:
        return self.key_matches > self.threshold

    @property
    def multiple_identifiers(self) -> bool:
        return self.identifiers >= MIN_LISTING_IDENTIFIERS

    @property
    def report_mode(self) -> bool:
        # Any one signal is enough.
        return (
            self.title
            or self.paired_columns
            or self.match_count_exceeded
            or self.multiple_identifiers
        )


def active_panel(document: TextScope) -> TextScope | None:
    for panel in document.nodes("panel"):
        if panel.visible and panel.active:
            return panel
    return None


def visible_panel(document: TextScope) -> TextScope | None:
    for panel in document.nodes("panel"):
        if panel.visible:
            return panel
    return None


def whole_document(document: TextScope) -> TextScope:
    return document


def has_paired_columns(text: str) -> bool:
    """True if some line carries both an identifier and a name column header.

    A profile shows "Student Number 12345678" on one line; a listing shows
    the header row without a value on it.
    """
    for line in text.splitlines():
        if ID_COLUMN_RE.search(line) and NAME_COLUMN_RE.search(line) and not IDENTIFIER_RE.search(line):
            return True
    return False


def distinct_identifiers(text: str) -> set[str]:
    return set(IDENTIFIER_RE.findall(text))


class ScopeResolver:
    """Pick the active text scope and classify it."""

    def __init__(
        self,
        report_match_threshold: int = DEFAULT_REPORT_MATCH_THRESHOLD,
        key_code_re: re.Pattern[str] = KEY_CODE_RE,
    ) -> None:
        self.report_match_threshold = report_match_threshold
        self.key_code_re = key_code_re
        self._chain: FallbackChain[TextScope] = FallbackChain(
            "scope",
            [
                ("active_panel", active_panel),
                ("visible_panel", visible_panel),
                ("document", whole_document),
            ],
        )

    def resolve_active_scope(self, document: TextScope) -> TextScope:
        """Narrowest active region: explicit active panel, any visible panel, or the document."""
        outcome = self._chain.run(document)
        logger.debug("scope_resolved", strategy=outcome.strategy)
        return outcome.value if outcome.value is not None else document

    def report_signals(self, scope: TextScope) -> ReportSignals:
        text = scope.text
        return ReportSignals(
            title=bool(REPORT_TITLE_RE.search(text)),
            paired_columns=has_paired_columns(text),
            key_matches=len(iter_key_codes(text, self.key_code_re)),
            identifiers=len(distinct_identifiers(text)),
            threshold=self.report_match_threshold,
        )

    def is_report_mode(self, scope: TextScope) -> bool:
        signals = self.report_signals(scope)
        if signals.report_mode:
            logger.info(
                "report_mode_detected",
                title=signals.title,
                paired_columns=signals.paired_columns,
                key_matches=signals.key_matches,
                identifiers=signals.identifiers,
            )
        return signals.report_mode
