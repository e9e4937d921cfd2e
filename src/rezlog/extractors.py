# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Field extraction strategies and the fallback chains built from them.

Each strategy is pure with respect to the scope it is given and returns
None when its field is not present. ``FieldExtractors`` wires them into
chains in reliability order.
"""

from __future__ import annotations

from rezlog.chain import FallbackChain
from rezlog.constants import DEFAULT_REZ360_WINDOW_CHARS
from rezlog.patterns import (
    PARCEL_COUNTER_RE,
    PARCEL_SECTION_LABEL,
    REZ360_LABEL,
    REZ360_LABEL_RE,
    ROOM_PAIR_RE,
    ROOM_SPACE_RE,
    STAFF_NAME_KEY,
    STAFF_NAME_RE,
    STAFF_PAYLOAD_MARKER,
    STUDENT_NUMBER_RE,
    find_room_codes,
    is_nav_chrome,
)
from rezlog.proximity import window_after
from rezlog.scope.base import TextScope


# Staff


def staff_from_analytics_payload(document: TextScope) -> str | None:
    """First quoted ``full_name`` value in the analytics initialization script."""
    for script in document.nodes("script"):
        payload = script.text
        if STAFF_PAYLOAD_MARKER not in payload or STAFF_NAME_KEY not in payload:
            continue
        match = STAFF_NAME_RE.search(payload)
        if match:
            value = next((g for g in match.groups() if g), "").strip()
            if value:
                return value
    return None


# Resident name


def resident_name_from_breadcrumbs(scope: TextScope) -> str | None:
    """First breadcrumb holding a comma and no navigation chrome word.

    Breadcrumbs reflect what the browser is showing right now, unlike body
    text which can lag behind or repeat other residents.
    """
    for crumb in scope.nodes("breadcrumb"):
        if not crumb.visible:
            continue
        text = " ".join(crumb.text.split())
        if "," in text and not is_nav_chrome(text):
            return text
    return None


# Identifier


def identifier_from_student_number(scope: TextScope) -> str | None:
    match = STUDENT_NUMBER_RE.search(scope.text)
    return match.group(1) if match else None


# Room code


def room_from_room_pair(scope: TextScope) -> str | None:
    """``Room PARENT/BEDSPACE``: the bedspace, not the parent room."""
    match = ROOM_PAIR_RE.search(scope.text)
    return match.group(1) if match else None


def room_from_rez360(scope: TextScope, window: int = DEFAULT_REZ360_WINDOW_CHARS) -> str | None:
    """First room code inside the "Rez 360" subsection.

    Uses a labelled section node when the host marks one, otherwise a bounded
    window of text after the "Rez 360" label.
    """
    for role in ("section", "panel"):
        for section in scope.nodes(role):
            if section.visible and REZ360_LABEL_RE.search(section.label):
                codes = find_room_codes(section.text)
                if codes:
                    return codes[0]
    if REZ360_LABEL_RE.search(scope.label):
        codes = find_room_codes(scope.text)
        if codes:
            return codes[0]
    text = window_after(scope.text, REZ360_LABEL, window, literal=False)
    if text:
        codes = find_room_codes(text)
        if codes:
            return codes[0]
    return None


def room_from_room_space(scope: TextScope) -> str | None:
    match = ROOM_SPACE_RE.search(scope.text)
    return match.group(1) if match else None


def room_last_match(scope: TextScope) -> str | None:
    """Last resort: the last room code anywhere in scope.

    Later mentions are more likely the current assignment than a sidebar or
    summary line near the top.
    """
    codes = find_room_codes(scope.text)
    return codes[-1] if codes else None


# Parcels


def _parcel_sections(document: TextScope) -> list[TextScope]:
    return [
        section
        for section in document.nodes("section")
        if section.visible and PARCEL_SECTION_LABEL.lower() in section.label.lower()
    ]


def parcels_from_issue_buttons(document: TextScope) -> int | None:
    """Count visible "Issue" buttons (not "Reissue") in the Parcels section."""
    for section in _parcel_sections(document):
        count = 0
        for button in section.nodes("button"):
            text = button.text.lower()
            if button.visible and "issue" in text and "reissue" not in text:
                count += 1
        if count:
            return count
    return None


def parcels_from_counter(document: TextScope) -> int | None:
    """The "N Parcels" counter text."""
    for line in document.text.splitlines():
        match = PARCEL_COUNTER_RE.match(line)
        if match:
            count = int(match.group(1))
            return count or None
    return None


class FieldExtractors:
    """Fallback chains for every field, in reliability order."""

    def __init__(self, rez360_window_chars: int = DEFAULT_REZ360_WINDOW_CHARS) -> None:
        self.rez360_window_chars = rez360_window_chars
        self.staff_name: FallbackChain[str] = FallbackChain(
            "staff_name",
            [("analytics_payload", staff_from_analytics_payload)],
        )
        self.resident_name: FallbackChain[str] = FallbackChain(
            "resident_name",
            [("breadcrumb", resident_name_from_breadcrumbs)],
        )
        self.identifier: FallbackChain[str] = FallbackChain(
            "identifier",
            [("student_number_label", identifier_from_student_number)],
        )
        self.room_code: FallbackChain[str] = FallbackChain(
            "room_code",
            [
                ("room_pair", room_from_room_pair),
                ("rez360_section", self._room_from_rez360),
                ("room_space_label", room_from_room_space),
                ("last_room_code", room_last_match),
            ],
        )
        self.parcel_count: FallbackChain[int] = FallbackChain(
            "parcel_count",
            [
                ("issue_buttons", parcels_from_issue_buttons),
                ("parcel_counter", parcels_from_counter),
            ],
        )

    def _room_from_rez360(self, scope: TextScope) -> str | None:
        return room_from_rez360(scope, self.rez360_window_chars)

    @property
    def chains(self) -> list[FallbackChain]:
        return [self.staff_name, self.resident_name, self.identifier, self.room_code, self.parcel_count]
