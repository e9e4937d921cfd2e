# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Log-line and label formatting for desk staff.

Package log:  ``J.D (20990921) UWP-BECK-204a 2 pkgs @ 3:07 pm - AS``
Lockout log:  ``J.D (20990921) UWP-BECK-204a lockout - keys AB12, LOANER7 @ 3:07 pm - AS``
Package label: ``Doe, Jane | UWP-BECK-204a | 20990921``
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from rezlog.constants import STAFF_PLACEHOLDER_INITIALS
from rezlog.models import ResidentRecord, StaffIdentity


def initials(full_name: str) -> str:
    """``FirstInitials.LastInitials`` in upper case.

    "Doe, Jane Ann" -> "JA.D"; "Jane Doe" -> "J.D"; "Cher" -> "C".
    """
    if "," in full_name:
        last, _, first = (p.strip() for p in full_name.partition(","))
        first_initials = "".join(n[0] for n in first.split())
        last_initials = "".join(n[0] for n in last.split())
        return f"{first_initials}.{last_initials}".upper()

    parts = full_name.split()
    if len(parts) > 1:
        last = parts.pop()
        return f"{''.join(n[0] for n in parts)}.{last[0]}".upper()
    return "".join(p[0] for p in parts).upper()


def staff_initials(staff: StaffIdentity | None) -> str:
    """Staff initials without the dot ("AS"), or the "XX" placeholder."""
    raw = initials(staff.full_name) if staff else STAFF_PLACEHOLDER_INITIALS
    return raw.replace(".", "", 1)


def clock_time(now: datetime) -> str:
    """12-hour clock, lowercase meridiem: ``3:07 pm``, ``12:00 am``."""
    hours = now.hour % 12 or 12
    meridiem = "pm" if now.hour >= 12 else "am"
    return f"{hours}:{now.minute:02d} {meridiem}"


def package_log_entry(
    record: ResidentRecord,
    staff: StaffIdentity | None,
    package_count: int = 1,
    now: datetime | None = None,
) -> str:
    now = now or datetime.now()
    plural = "s" if package_count > 1 else ""
    return (
        f"{initials(record.full_name)} ({record.identifier}) {record.room_code} "
        f"{package_count} pkg{plural} @ {clock_time(now)} - {staff_initials(staff)}"
    )


def lockout_log_entry(
    record: ResidentRecord,
    key_codes: Iterable[str],
    staff: StaffIdentity | None,
    now: datetime | None = None,
) -> str:
    now = now or datetime.now()
    codes = sorted(key_codes)
    noun = "keys" if len(codes) > 1 else "key"
    return (
        f"{initials(record.full_name)} ({record.identifier}) {record.room_code} "
        f"lockout - {noun} {', '.join(codes)} @ {clock_time(now)} - {staff_initials(staff)}"
    )


def package_label(record: ResidentRecord) -> str:
    return f"{record.full_name} | {record.room_code} | {record.identifier}"
