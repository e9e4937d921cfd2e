# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Desk log helper: recover resident, staff and key records from rendered housing pages."""

from __future__ import annotations

from rezlog.composer import LogComposer
from rezlog.engine import ExtractionEngine
from rezlog.models import (
    FailureReason,
    KeyCodeResult,
    LogResult,
    ResidentRecord,
    ResidentResult,
    StaffIdentity,
)
from rezlog.scope import NodeScope, TextNode, TextScope, from_dict, from_html, from_text

__all__ = [
    "ExtractionEngine",
    "FailureReason",
    "KeyCodeResult",
    "LogComposer",
    "LogResult",
    "NodeScope",
    "ResidentRecord",
    "ResidentResult",
    "StaffIdentity",
    "TextNode",
    "TextScope",
    "from_dict",
    "from_html",
    "from_text",
]
