# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Text scopes and active-scope resolution."""

from __future__ import annotations

from rezlog.scope.base import NodeScope, TextNode, TextScope, from_dict, from_text
from rezlog.scope.html import from_html
from rezlog.scope.resolver import ReportSignals, ScopeResolver

__all__ = [
    "NodeScope",
    "ReportSignals",
    "ScopeResolver",
    "TextNode",
    "TextScope",
    "from_dict",
    "from_html",
    "from_text",
]
