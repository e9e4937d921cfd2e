# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bounded-window scoped search.

The host page renders key-assignment rows as flat text, so "this key belongs
to this resident" can only be judged by distance in text. ``search_near``
answers one question: which matches of a pattern start within ``window``
characters after an occurrence of an anchor. A window never runs past the
next ``stop`` match, which is how one resident's row is kept from bleeding
into the next.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from rezlog.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Window:
    """A slice of text following one anchor occurrence."""

    anchor_start: int
    start: int
    end: int
    text: str


def anchor_windows(
    text: str,
    anchor: str,
    window: int,
    *,
    stop: re.Pattern[str] | None = None,
    ignore: Iterable[str] = (),
    literal: bool = True,
) -> list[Window]:
    """Return the text window after each occurrence of ``anchor``.

    Args:
        text: Text to search
        anchor: Anchor text (escaped unless ``literal`` is False)
        window: Maximum window size in characters
        stop: Pattern whose first match ends the window early
        ignore: Stop matches with this text (and the anchor text itself) do
            not end the window
        literal: Treat ``anchor`` as literal text

    Returns:
        Windows in order of anchor occurrence
    """
    if not text or not anchor or window <= 0:
        return []
    anchor_re = re.compile(re.escape(anchor) if literal else anchor)
    ignored = set(ignore)
    windows: list[Window] = []
    for m in anchor_re.finditer(text):
        start = m.end()
        end = min(len(text), start + window)
        if stop is not None:
            for s in stop.finditer(text, start, end):
                if s.group(0) == m.group(0) or s.group(0) in ignored:
                    continue
                end = s.start()
                break
        windows.append(Window(anchor_start=m.start(), start=start, end=end, text=text[start:end]))
    return windows


def search_near(
    text: str,
    anchor: str,
    pattern: re.Pattern[str],
    window: int,
    *,
    stop: re.Pattern[str] | None = None,
    ignore: Iterable[str] = (),
    literal: bool = True,
) -> list[re.Match[str]]:
    """Find matches of ``pattern`` that start within a window after ``anchor``.

    A match that starts inside the window is returned whole, so a token cut by
    the window boundary is never truncated. Match offsets refer to ``text``.
    """
    found: list[re.Match[str]] = []
    for w in anchor_windows(text, anchor, window, stop=stop, ignore=ignore, literal=literal):
        for m in pattern.finditer(text, w.start):
            if m.start() >= w.end:
                break
            found.append(m)
    logger.debug("proximity_search", anchor_len=len(anchor), window=window, matches=len(found))
    return found


def window_after(text: str, anchor: str, window: int, *, literal: bool = True) -> str | None:
    """Text of the first window after ``anchor``, or None if the anchor is absent."""
    windows = anchor_windows(text, anchor, window, literal=literal)
    return windows[0].text if windows else None
