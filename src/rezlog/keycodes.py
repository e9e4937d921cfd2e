# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Key-code extraction for lockout logs.

In a single-profile view every key label on screen belongs to the resident.
In report mode several residents' rows are flattened into one text blob, so
only codes found in a bounded window after the resident's identifier (or,
failing that, their display name) are accepted. Report mode never falls
back to the unscoped codes: an empty result is far better than logging
somebody else's key.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from rezlog.constants import DEFAULT_KEY_WINDOW_CHARS
from rezlog.logging import get_logger
from rezlog.models import FailureReason, KeyCodeResult
from rezlog.patterns import (
    IDENTIFIER_RE,
    KEY_CODE_RE,
    ROW_START_RE,
    clean_key_token,
    iter_key_codes,
)
from rezlog.proximity import search_near
from rezlog.scope.base import TextScope
from rezlog.scope.resolver import ScopeResolver

logger = get_logger(__name__)

MIN_TOKEN_LENGTH = 3


def accept_token(token: str, identifier: str | None = None) -> bool:
    """Token filter applied to every candidate, scoped or not.

    Lowercase characters mark usernames and e-mail fragments in this host
    system; real key codes are uppercase.
    """
    if len(token) < MIN_TOKEN_LENGTH:
        return False
    if any(ch.islower() for ch in token):
        return False
    if identifier and token == identifier:
        return False
    return "@" not in token


def filter_tokens(tokens: Iterable[str], identifier: str | None = None) -> frozenset[str]:
    return frozenset(t for t in (clean_key_token(raw) for raw in tokens) if accept_token(t, identifier))


def unscoped_candidates(text: str, pattern: re.Pattern[str] = KEY_CODE_RE) -> list[str]:
    """Every labelled key token in ``text``, unfiltered."""
    return [m.group("code") for m in iter_key_codes(text, pattern)]


class KeyCodeFilter:
    """Find the current resident's key codes in a text scope."""

    def __init__(
        self,
        resolver: ScopeResolver,
        window_chars: int = DEFAULT_KEY_WINDOW_CHARS,
        key_code_re: re.Pattern[str] | None = None,
    ) -> None:
        """Initialize filter.

        Args:
            resolver: Used for report-mode detection
            window_chars: How far after the anchor a key row may start
            key_code_re: Key-label pattern (the resolver's when None)
        """
        self._resolver = resolver
        self.window_chars = window_chars
        self.key_code_re = key_code_re or resolver.key_code_re

    def scoped_candidates(
        self,
        text: str,
        anchor: str,
        identifier: str | None = None,
        *,
        stop: re.Pattern[str] = IDENTIFIER_RE,
        ignore: tuple[str, ...] = (),
        literal: bool = True,
    ) -> frozenset[str]:
        """Filtered key codes within the window after ``anchor``.

        Windows end early at the next ``stop`` match (by default the next
        different 8-digit identifier), which is where the next resident's
        row begins. Stop matches listed in ``ignore`` do not end the window.
        """
        if identifier:
            ignore = (*ignore, identifier)
        matches = search_near(
            text,
            anchor,
            self.key_code_re,
            self.window_chars,
            stop=stop,
            ignore=ignore,
            literal=literal,
        )
        return filter_tokens((m.group("code") for m in matches), identifier)

    def extract(
        self,
        scope: TextScope,
        resident_name: str | None,
        resident_identifier: str | None,
    ) -> KeyCodeResult:
        text = scope.text
        report_mode = self._resolver.is_report_mode(scope)

        if report_mode:
            codes: frozenset[str] = frozenset()
            if resident_identifier:
                anchor = rf"(?<!\d){re.escape(resident_identifier)}(?!\d)"
                codes = self.scoped_candidates(text, anchor, resident_identifier, literal=False)
                if codes:
                    logger.debug("keys_scoped_by_identifier", count=len(codes))
            if not codes and resident_name:
                codes = self.scoped_candidates(
                    text,
                    resident_name,
                    resident_identifier,
                    stop=ROW_START_RE,
                    ignore=(resident_name,),
                )
                if codes:
                    logger.debug("keys_scoped_by_name", count=len(codes))
            if not codes:
                logger.info("no_scoped_keys_in_report_mode")
                return KeyCodeResult(error=FailureReason.NO_KEYS_FOUND, report_mode=True)
            return KeyCodeResult(codes=codes, report_mode=True)

        codes = filter_tokens(unscoped_candidates(text, self.key_code_re), resident_identifier)
        if not codes:
            return KeyCodeResult(error=FailureReason.NO_KEYS_FOUND)
        return KeyCodeResult(codes=codes)

    def extract_key_codes(
        self,
        scope: TextScope,
        resident_name: str | None,
        resident_identifier: str | None,
    ) -> frozenset[str] | None:
        """Key codes for the resident, or None when there are none to report."""
        return self.extract(scope, resident_name, resident_identifier).codes
