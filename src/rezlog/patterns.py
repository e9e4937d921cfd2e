# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Recognized formats for room codes, identifiers and key-code tokens.

Room/bedspace codes look like ``UWP-BECK-204a``: an uppercase alphanumeric
building token (digits allowed, e.g. ``V1``; an ``N``/``S`` wing suffix is
just part of the token), at most one extra hyphen-joined segment, a hyphen,
the room digits and a single lowercase bedspace letter. The parent room
(``UWP-BECK-204``) has no bedspace letter and is not a room code.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from rezlog.errors import PatternError

_BUILDING = r"[A-Z][A-Z0-9]*[NS]?"
_SEGMENT = r"[A-Z0-9]+"
ROOM_CODE = rf"(?<![A-Za-z0-9-]){_BUILDING}(?:-{_SEGMENT})?-\d+[a-z](?![A-Za-z0-9])"
# Parent room token, first half of "Room A/B"
_PARENT_ROOM = r"[A-Z0-9][A-Z0-9-]*[A-Za-z0-9]"

ROOM_CODE_RE = re.compile(ROOM_CODE)
ROOM_CODE_FULL_RE = re.compile(rf"^{_BUILDING}(?:-{_SEGMENT})?-\d+[a-z]$")

ROOM_PAIR_RE = re.compile(rf"\bRoom:?\s+{_PARENT_ROOM}\s*/\s*({ROOM_CODE})")
ROOM_SPACE_RE = re.compile(rf"\bRoom Space:?\s+({ROOM_CODE})")
REZ360_LABEL = r"(?i:Rez\s*360)"
REZ360_LABEL_RE = re.compile(REZ360_LABEL)

IDENTIFIER = r"(?<!\d)\d{8}(?!\d)"
IDENTIFIER_RE = re.compile(IDENTIFIER)
IDENTIFIER_FULL_RE = re.compile(r"^\d{8}$")
STUDENT_NUMBER_RE = re.compile(r"Student Number:?\s+(\d{8})(?!\d)")

# "Last, First" as printed in listing rows; with IDENTIFIER it marks where a
# resident row begins.
RESIDENT_NAME = r"\b[A-Z][A-Za-z'\-]+(?: [A-Z][A-Za-z'\-]+)*, [A-Z][A-Za-z'\-]+"
ROW_START_RE = re.compile(rf"{IDENTIFIER}|{RESIDENT_NAME}")
RESIDENT_NAME_RE = re.compile(RESIDENT_NAME)

KEY_LABELS = ("Bedroom", "Suite", "Floor", "Unit", "Key", "LOANER")


def _key_code(labels: tuple[str, ...]) -> str:
    # Label word, up to two qualifier words ("Bedroom Key", "Suite Door Key"),
    # a colon, then the raw token. Tokens are captured loosely so lowercase
    # and e-mail fragments can be rejected whole by the token filter.
    return (
        r"(?i:\b(?:" + "|".join(labels) + r")s?\b(?:[ \t]+[A-Za-z]+){0,2}?)"
        r"[ \t]*:\s*(?P<code>[A-Za-z0-9][A-Za-z0-9@._-]*)"
    )


KEY_CODE = _key_code(KEY_LABELS)
KEY_CODE_RE = re.compile(KEY_CODE)

STAFF_PAYLOAD_MARKER = "pendo.initialize"
STAFF_NAME_KEY = "full_name"
STAFF_NAME_RE = re.compile(
    r"""full_name['"]?\s*:\s*(?:`([^`]+)`|"([^"]+)"|'([^']+)')"""
)

NAV_CHROME_WORDS = ("Dashboard", "Desk", "Front", "Home")
NAME_SEPARATOR = ","

REPORT_TITLE_RE = re.compile(
    r"\b(?:keys?|loaner|lockout|assignment|occupancy|room)\s+(?:assignment\s+)?(?:report|listing)\b",
    re.IGNORECASE,
)
ID_COLUMN_RE = re.compile(r"\b(?:Student Number|Student ID|ID Number)\b", re.IGNORECASE)
NAME_COLUMN_RE = re.compile(r"\b(?:Name|Full Name|Last Name|Resident)\b", re.IGNORECASE)

PARCEL_COUNTER_RE = re.compile(r"^\s*(\d+)\s+Parcels?\s*$", re.IGNORECASE)
PARCEL_SECTION_LABEL = "Parcels"


def compile_pattern(pattern: str, flags: int = 0) -> re.Pattern[str]:
    """Compile a caller-supplied pattern, raising PatternError on bad syntax."""
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise PatternError(f"invalid pattern {pattern!r}: {e}") from e


def is_room_code(value: str) -> bool:
    return bool(ROOM_CODE_FULL_RE.match(value))


def is_identifier(value: str) -> bool:
    return bool(IDENTIFIER_FULL_RE.match(value))


def has_name_separator(value: str) -> bool:
    """True for "Last, First" style names with text on both sides of the comma."""
    last, sep, first = value.partition(NAME_SEPARATOR)
    return bool(sep) and bool(last.strip()) and bool(first.strip())


def is_nav_chrome(text: str) -> bool:
    return any(word in text for word in NAV_CHROME_WORDS)


def find_room_codes(text: str) -> list[str]:
    return ROOM_CODE_RE.findall(text)


def key_code_pattern(extra_labels: Iterable[str] = ()) -> re.Pattern[str]:
    """Key-code pattern for the built-in label vocabulary plus ``extra_labels``.

    Extra labels are regex fragments (e.g. ``Mail(?:box)?``) taken from
    configuration.

    Raises:
        PatternError: If a label, or the combined pattern, does not compile
    """
    extra = tuple(extra_labels)
    if not extra:
        return KEY_CODE_RE
    for label in extra:
        compile_pattern(label)
    return compile_pattern(_key_code((*KEY_LABELS, *extra)))


def iter_key_codes(text: str, pattern: re.Pattern[str] = KEY_CODE_RE) -> list[re.Match[str]]:
    """All key-label/code matches in ``text``, in order."""
    return list(pattern.finditer(text))


def clean_key_token(token: str) -> str:
    return token.rstrip(".-_")
