# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for field extraction strategies and their fallback chains."""

from __future__ import annotations

import pytest

from rezlog.chain import FallbackChain
from rezlog.extractors import (
    FieldExtractors,
    identifier_from_student_number,
    parcels_from_counter,
    parcels_from_issue_buttons,
    resident_name_from_breadcrumbs,
    room_from_rez360,
    staff_from_analytics_payload,
)
from rezlog.scope import NodeScope, TextNode, from_text


@pytest.fixture
def extractors() -> FieldExtractors:
    return FieldExtractors()


class TestFallbackChain:
    def test_first_hit_wins(self):
        chain = FallbackChain("f", [("a", lambda s: None), ("b", lambda s: "B"), ("c", lambda s: "C")])
        outcome = chain.run(from_text(""))
        assert outcome.value == "B"
        assert outcome.strategy == "b"
        assert chain.runs == 1

    def test_all_miss(self):
        chain = FallbackChain("f", [("a", lambda s: None)])
        outcome = chain.run(from_text(""))
        assert not outcome.found
        assert outcome.strategy is None

    def test_empty_chain_rejected(self):
        with pytest.raises(ValueError):
            FallbackChain("f", [])


class TestStaff:
    def test_backtick_value(self, profile_html_document):
        assert staff_from_analytics_payload(profile_html_document) == "Alex Smith"

    def test_double_quoted_value(self):
        doc = from_text("", scripts=['pendo.initialize({visitor: {"full_name": "Pat Lee"}})'])
        assert staff_from_analytics_payload(doc) == "Pat Lee"

    def test_requires_initializer_marker(self):
        doc = from_text("", scripts=["analytics.track({full_name: 'Pat Lee'})"])
        assert staff_from_analytics_payload(doc) is None

    def test_absent(self, profile_document):
        assert staff_from_analytics_payload(profile_document) is None


class TestResidentName:
    def test_skips_navigation_chrome(self):
        doc = from_text("", breadcrumbs=["Front Desk", "Desk, Main Office", "Doe, Jane"])
        assert resident_name_from_breadcrumbs(doc) == "Doe, Jane"

    def test_skips_hidden_crumbs(self):
        doc = NodeScope(
            TextNode(
                role="document",
                children=[
                    TextNode(role="breadcrumb", text="Roe, Rick", hidden=True),
                    TextNode(role="breadcrumb", text="Doe,   Jane"),
                ],
            )
        )
        assert resident_name_from_breadcrumbs(doc) == "Doe, Jane"

    def test_no_comma(self):
        assert resident_name_from_breadcrumbs(from_text("", breadcrumbs=["Jane Doe"])) is None


class TestIdentifier:
    def test_student_number_label(self, profile_document):
        assert identifier_from_student_number(profile_document) == "20990921"

    def test_value_on_next_line(self):
        assert identifier_from_student_number(from_text("Student Number:\n20990921")) == "20990921"

    def test_nine_digits_rejected(self):
        assert identifier_from_student_number(from_text("Student Number 209909211")) is None


class TestRoomCode:
    """Each room strategy, and the order the chain tries them in."""

    def test_room_pair(self, extractors, profile_document):
        outcome = extractors.room_code.run(profile_document)
        assert outcome.value == "UWP-BECK-204a"
        assert outcome.strategy == "room_pair"

    def test_rez360_section_label(self, extractors):
        doc = NodeScope(
            TextNode(
                role="document",
                children=[
                    TextNode(role="section", label="Rez 360", children=[TextNode(text="Assigned V1-W2-311a")]),
                    TextNode(text="Previous CLVN-349b"),
                ],
            )
        )
        outcome = extractors.room_code.run(doc)
        assert outcome.value == "V1-W2-311a"
        assert outcome.strategy == "rez360_section"

    def test_rez360_text_window(self, extractors):
        doc = from_text("Summary CLVN-349b\nRez 360\nCurrent REV-E4-455a\nHistory V1-W2-311a")
        outcome = extractors.room_code.run(doc)
        assert outcome.value == "REV-E4-455a"
        assert outcome.strategy == "rez360_section"

    def test_rez360_window_is_bounded(self):
        doc = from_text("Rez 360" + " " * 50 + "REV-E4-455a")
        assert room_from_rez360(doc, window=20) is None

    def test_room_space_label(self, extractors):
        doc = from_text("Room Space: CLVN-349b\nSee also V1-W2-311a")
        outcome = extractors.room_code.run(doc)
        assert outcome.value == "CLVN-349b"
        assert outcome.strategy == "room_space_label"

    def test_last_room_code(self, extractors):
        doc = from_text("was V1-W2-311a now REV-E4-455a")
        outcome = extractors.room_code.run(doc)
        assert outcome.value == "REV-E4-455a"
        assert outcome.strategy == "last_room_code"

    def test_parent_room_only(self, extractors):
        assert extractors.room_code(from_text("Room UWP-BECK-204")) is None


class TestParcels:
    def test_issue_buttons(self, profile_html_document):
        assert parcels_from_issue_buttons(profile_html_document) == 2

    def test_counter(self):
        assert parcels_from_counter(from_text("Parcels\n3 Parcels")) == 3

    def test_zero_counter(self):
        assert parcels_from_counter(from_text("0 Parcels")) is None

    def test_chain_falls_back_to_counter(self, extractors):
        outcome = extractors.parcel_count.run(from_text("1 Parcel"))
        assert outcome.value == 1
        assert outcome.strategy == "parcel_counter"
