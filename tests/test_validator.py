# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for record validation and the consecutive-failure limit."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rezlog.cache import ExtractionCache
from rezlog.models import CandidateRecord, ResidentRecord
from rezlog.validator import RecordValidator

GOOD = {"full_name": "Doe, Jane", "identifier": "20990921", "room_code": "UWP-BECK-204a"}


def _candidate(**overrides) -> CandidateRecord:
    return CandidateRecord(**(GOOD | overrides))


class TestResidentRecord:
    def test_valid(self):
        record = ResidentRecord(**GOOD | {"full_name": "  Doe, Jane "})
        assert record.full_name == "Doe, Jane"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("identifier", "2099092"),
            ("identifier", "209909211"),
            ("identifier", "2099092x"),
            ("room_code", "UWP-BECK-204"),
            ("room_code", "uwp-beck-204a"),
            ("full_name", "Jane Doe"),
            ("full_name", "Doe,"),
        ],
    )
    def test_rejected(self, field, value):
        with pytest.raises(ValidationError):
            ResidentRecord(**GOOD | {field: value})

    def test_frozen(self):
        record = ResidentRecord(**GOOD)
        with pytest.raises(ValidationError):
            record.identifier = "11111111"


class TestRecordValidator:
    def test_accepts_and_caches(self):
        cache = ExtractionCache()
        validator = RecordValidator(cache)
        record = validator.validate(_candidate(), "sig")
        assert record is not None
        assert cache.get("sig") == record

    def test_missing_field(self):
        validator = RecordValidator(ExtractionCache())
        assert validator.validate(_candidate(room_code=None), "sig") is None
        assert validator.consecutive_failures == 1

    def test_explain(self):
        reasons = RecordValidator.explain(_candidate(identifier="123"))
        assert len(reasons) == 1
        assert reasons[0].startswith("identifier:")
        assert RecordValidator.explain(_candidate()) == []

    def test_rejection_keeps_cached_record(self):
        cache = ExtractionCache()
        validator = RecordValidator(cache)
        good = validator.validate(_candidate(), "sig")
        validator.validate(_candidate(identifier="bad"), "sig")
        assert cache.get("sig") == good

    def test_failure_limit_clears_cache(self):
        cache = ExtractionCache()
        validator = RecordValidator(cache, max_consecutive_failures=3)
        validator.validate(_candidate(), "sig")
        validator.record_failure()
        validator.record_failure()
        assert cache.peek() is not None
        validator.record_failure()
        assert cache.peek() is None
        assert validator.consecutive_failures == 0

    def test_success_resets_counter(self):
        validator = RecordValidator(ExtractionCache(), max_consecutive_failures=3)
        validator.record_failure()
        validator.record_failure()
        validator.validate(_candidate(), "sig")
        assert validator.consecutive_failures == 0
