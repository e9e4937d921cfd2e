# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Text scopes: rendered page text with containment and visibility.

The engine never sees markup. A host integration hands it a tree of
text-bearing nodes, each tagged with the role it plays on the page
(tab panel, breadcrumb, script payload, ...). ``TextScope`` is the view the
engine works against; ``NodeScope`` implements it over ``TextNode`` trees.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, Field, ValidationError

from rezlog.errors import ScopeError

NodeRole = Literal[
    "document",
    "panel",
    "section",
    "breadcrumb",
    "script",
    "heading",
    "button",
    "text",
]


class TextNode(BaseModel):
    """One text-bearing node of a rendered page snapshot."""

    role: NodeRole = "text"
    text: str = ""
    label: str | None = None
    hidden: bool = False
    active: bool = False
    children: list[TextNode] = Field(default_factory=list)


@runtime_checkable
class TextScope(Protocol):
    """A region of rendered text the engine may read."""

    @property
    def role(self) -> str: ...

    @property
    def label(self) -> str: ...

    @property
    def visible(self) -> bool: ...

    @property
    def active(self) -> bool: ...

    @property
    def text(self) -> str: ...

    def nodes(self, role: str | None = None) -> Iterator[TextScope]: ...


class NodeScope:
    """TextScope over a ``TextNode`` subtree."""

    def __init__(self, node: TextNode, *, ancestor_hidden: bool = False) -> None:
        """Wrap ``node``.

        Args:
            node: Subtree root
            ancestor_hidden: Some ancestor of ``node`` is hidden, so the node
                is not on screen whatever its own flag says
        """
        self._node = node
        self._ancestor_hidden = ancestor_hidden
        self._text: str | None = None

    def __repr__(self) -> str:
        return f"NodeScope(role={self._node.role!r}, label={self.label!r})"

    @property
    def node(self) -> TextNode:
        return self._node

    @property
    def role(self) -> str:
        return self._node.role

    @property
    def label(self) -> str:
        return self._node.label or ""

    @property
    def visible(self) -> bool:
        return not (self._node.hidden or self._ancestor_hidden)

    @property
    def active(self) -> bool:
        return self._node.active

    @property
    def text(self) -> str:
        """Rendered text: own text plus visible, non-script descendants, one segment per line.

        A script node's own payload is returned when the scope is the script
        itself; scripts are never part of an ancestor's rendered text.
        """
        if self._text is None:
            parts: list[str] = []
            _collect_text(self._node, parts, root=True)
            self._text = "\n".join(parts)
        return self._text

    def nodes(self, role: str | None = None) -> Iterator[NodeScope]:
        """Yield descendant scopes depth first, hidden ones included.

        Each yielded scope knows whether an ancestor hides it, so ``visible``
        reflects what is actually on screen.
        """
        hidden = self._node.hidden or self._ancestor_hidden
        stack = [(child, hidden) for child in reversed(self._node.children)]
        while stack:
            node, ancestor_hidden = stack.pop()
            if role is None or node.role == role:
                yield NodeScope(node, ancestor_hidden=ancestor_hidden)
            below = ancestor_hidden or node.hidden
            stack.extend((child, below) for child in reversed(node.children))

    def first(self, role: str) -> NodeScope | None:
        return next(self.nodes(role), None)


def _collect_text(node: TextNode, parts: list[str], *, root: bool = False) -> None:
    if not root and (node.hidden or node.role == "script"):
        return
    own = node.text.strip()
    if own:
        parts.append(own)
    for child in node.children:
        _collect_text(child, parts)


def from_text(text: str, *, breadcrumbs: list[str] | None = None, scripts: list[str] | None = None) -> NodeScope:
    """Build a document scope from plain text plus optional breadcrumbs and scripts.

    Handy for hosts that can only supply ``innerText``, and for tests.
    """
    children = [TextNode(role="breadcrumb", text=crumb) for crumb in breadcrumbs or []]
    children.extend(TextNode(role="script", text=payload) for payload in scripts or [])
    children.append(TextNode(role="text", text=text))
    return NodeScope(TextNode(role="document", children=children))


def from_dict(data: dict[str, Any]) -> NodeScope:
    """Build a scope from a serialized node tree (as posted by a host integration)."""
    try:
        node = TextNode.model_validate(data)
    except ValidationError as e:
        raise ScopeError(f"invalid snapshot tree: {e.error_count()} error(s)") from e
    return NodeScope(node)
