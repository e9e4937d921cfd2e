# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Turn a saved or live-serialized HTML page into a ``TextNode`` tree.

BeautifulSoup does the parsing. This module only decides which elements
play which role for the engine (tab panel, breadcrumb, script payload, ...)
and which are hidden; everything else becomes plain text segments.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from rezlog.errors import ScopeError
from rezlog.logging import get_logger
from rezlog.scope.base import NodeRole, NodeScope, TextNode

logger = get_logger(__name__)

PANEL_CLASS = "ui-tabs-panel"
HIDDEN_CLASSES = frozenset({"ui-tabs-hide", "hidden", "d-none"})
BREADCRUMB_TAGS = frozenset({"habitat-header-breadcrumb-item"})
BREADCRUMB_CLASSES = frozenset({"breadcrumb-item"})
HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
SECTION_HEADER_TAGS = ("h1", "h2", "h3")
SECTION_HEADER_CLASS = "ui-widget-header"
SKIP_TAGS = frozenset({"style", "noscript", "template", "head", "meta", "link"})

_HIDDEN_STYLE_RE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE)


def _classes(tag: Tag) -> set[str]:
    value = tag.get("class") or []
    if isinstance(value, str):
        return set(value.split())
    return set(value)


def _flat_text(tag: Tag) -> str:
    return " ".join(tag.get_text(" ", strip=True).split())


def _is_hidden(tag: Tag) -> bool:
    if tag.has_attr("hidden"):
        return True
    if str(tag.get("aria-hidden", "")).lower() == "true":
        return True
    if _HIDDEN_STYLE_RE.search(str(tag.get("style", ""))):
        return True
    return bool(_classes(tag) & HIDDEN_CLASSES)


def _is_active(tag: Tag) -> bool:
    if str(tag.get("aria-hidden", "")).lower() == "false":
        return True
    if str(tag.get("aria-expanded", "")).lower() == "true":
        return True
    return "ui-tabs-panel-active" in _classes(tag)


def _section_header(tag: Tag) -> Tag | None:
    for child in tag.find_all(True, recursive=False):
        if child.name in SECTION_HEADER_TAGS or SECTION_HEADER_CLASS in _classes(child):
            return child
    return None


def _role(tag: Tag) -> NodeRole:
    classes = _classes(tag)
    if tag.name == "script":
        return "script"
    if tag.name in BREADCRUMB_TAGS or classes & BREADCRUMB_CLASSES:
        return "breadcrumb"
    if PANEL_CLASS in classes:
        return "panel"
    if tag.name in HEADING_TAGS or SECTION_HEADER_CLASS in classes:
        return "heading"
    if tag.name == "button" or (tag.name == "input" and tag.get("type") in ("button", "submit")):
        return "button"
    if tag.name == "a" and any("button" in c for c in classes):
        return "button"
    if tag.name == "section" or _section_header(tag) is not None:
        return "section"
    return "text"


def _convert(tag: Tag) -> TextNode | None:
    if tag.name in SKIP_TAGS:
        # scripts inside <head> still matter
        if tag.name == "head":
            scripts = [_convert(s) for s in tag.find_all("script")]
            return TextNode(role="text", hidden=True, children=[s for s in scripts if s])
        return None

    role = _role(tag)
    hidden = _is_hidden(tag)
    if role == "script":
        return TextNode(role="script", text="".join(str(c) for c in tag.contents), hidden=True)
    if role in ("breadcrumb", "heading"):
        return TextNode(role=role, text=_flat_text(tag), hidden=hidden)
    if role == "button":
        text = str(tag.get("value", "")) if tag.name == "input" else _flat_text(tag)
        return TextNode(role="button", text=text, hidden=hidden)

    label = None
    if role in ("panel", "section"):
        header = _section_header(tag)
        if header is not None:
            label = _flat_text(header)
        elif tag.get("aria-label"):
            label = str(tag.get("aria-label"))

    children: list[TextNode] = []
    for child in tag.children:
        if isinstance(child, Tag):
            node = _convert(child)
            if node is not None:
                children.append(node)
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            text = str(child).strip()
            if text:
                children.append(TextNode(role="text", text=text))

    return TextNode(
        role=role,
        label=label,
        hidden=hidden,
        active=role == "panel" and not hidden and _is_active(tag),
        children=children,
    )


def from_html(html: str, parser: str = "html.parser") -> NodeScope:
    """Parse ``html`` into a document scope.

    Args:
        html: Page markup (a saved page or ``document.documentElement.outerHTML``)
        parser: BeautifulSoup tree builder

    Raises:
        ScopeError: If ``html`` is empty
    """
    if not html or not html.strip():
        raise ScopeError("empty HTML snapshot")
    soup = BeautifulSoup(html, parser)
    children: list[TextNode] = []
    for child in soup.children:
        if isinstance(child, Tag):
            node = _convert(child)
            if node is not None:
                children.append(node)
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            text = str(child).strip()
            if text:
                children.append(TextNode(role="text", text=text))
    document = TextNode(role="document", children=children)
    logger.debug("html_snapshot_parsed", chars=len(html), top_level_nodes=len(children))
    return NodeScope(document)
