# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from rezlog.engine import ExtractionEngine
from rezlog.scope import NodeScope, from_html, from_text
from rezlog.settings import EngineConfig

PROFILE_TEXT = "Doe, Jane\nStudent Number 20990921\nRoom UWP-BECK-204/UWP-BECK-204a"

PROFILE_HTML = """
<html>
<head>
  <script>var x = 1;</script>
  <script>
    pendo.initialize({
      visitor: { id: 'u-42', email: 'asmith@example.edu', full_name: `Alex Smith` }
    });
  </script>
</head>
<body>
  <nav>
    <habitat-header-breadcrumb-item>Front Desk</habitat-header-breadcrumb-item>
    <habitat-header-breadcrumb-item>Desk, Main Office</habitat-header-breadcrumb-item>
    <habitat-header-breadcrumb-item>Doe, Jane</habitat-header-breadcrumb-item>
  </nav>
  <div class="ui-tabs-panel ui-tabs-hide" aria-hidden="true">
    <table>
      <tr><td>Student Number</td><td>99887766</td></tr>
      <tr><td>Room</td><td>CLVN-349/CLVN-349b</td></tr>
    </table>
  </div>
  <div class="ui-tabs-panel" aria-hidden="false">
    <section>
      <h3>Rez 360</h3>
      <table>
        <tr><td>Student Number</td><td>20990921</td></tr>
        <tr><td>Room</td><td>UWP-BECK-204/UWP-BECK-204a</td></tr>
        <tr><td>Bedroom Key:</td><td>BK2041</td></tr>
        <tr><td>Email:</td><td>jdoe@example.edu</td></tr>
      </table>
    </section>
    <section>
      <h2>Parcels</h2>
      <span>2 Parcels</span>
      <button>Issue</button>
      <button>Issue</button>
      <button>Reissue</button>
    </section>
  </div>
</body>
</html>
"""

REPORT_TEXT = (
    "Room Key Report\n"
    "11223344 Doe, Jane Bedroom Key: AB12 Suite Key: SU100\n"
    "99887766 Roe, Rick Bedroom Key: CD34 Suite Key: SU100\n"
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(clock: FakeClock) -> ExtractionEngine:
    """Engine with a 30 second cache TTL on a fake clock."""
    return ExtractionEngine(EngineConfig(cache_ttl_seconds=30.0), clock=clock)


@pytest.fixture
def profile_document() -> NodeScope:
    return from_text(PROFILE_TEXT, breadcrumbs=["Doe, Jane"])


@pytest.fixture
def profile_html_document() -> NodeScope:
    return from_html(PROFILE_HTML)


@pytest.fixture
def report_document() -> NodeScope:
    return from_text(REPORT_TEXT, breadcrumbs=["Doe, Jane"])
