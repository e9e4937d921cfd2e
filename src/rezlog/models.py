# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Records produced by the extraction engine."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rezlog.patterns import has_name_separator, is_identifier, is_room_code


class FailureReason(StrEnum):
    """User-facing reasons an extraction produced nothing."""

    RESIDENT_NOT_FOUND = "resident record not found"
    IDENTIFIER_NOT_FOUND = "identifier not found"
    ROOM_NOT_FOUND = "room code not found"
    NO_KEYS_FOUND = "no keys found for this resident"


class StaffIdentity(BaseModel):
    """Staff member operating the desk, read from the analytics payload."""

    full_name: str

    model_config = ConfigDict(frozen=True)


class ResidentRecord(BaseModel):
    """A validated resident: "Last, First" name, 8-digit identifier, bedspace."""

    full_name: str
    identifier: str
    room_code: str

    model_config = ConfigDict(frozen=True)

    @field_validator("full_name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if not has_name_separator(value):
            raise ValueError(f"name {value!r} is not in 'Last, First' form")
        return value

    @field_validator("identifier")
    @classmethod
    def _check_identifier(cls, value: str) -> str:
        if not is_identifier(value):
            raise ValueError(f"identifier {value!r} is not 8 digits")
        return value

    @field_validator("room_code")
    @classmethod
    def _check_room_code(cls, value: str) -> str:
        if not is_room_code(value):
            raise ValueError(f"room code {value!r} is not a bedspace code")
        return value


class CandidateRecord(BaseModel):
    """Unvalidated extraction output with the strategy that produced each field."""

    full_name: str | None = None
    identifier: str | None = None
    room_code: str | None = None
    sources: dict[str, str] = Field(default_factory=dict)

    def to_record_data(self) -> dict[str, Any]:
        return {
            "full_name": self.full_name,
            "identifier": self.identifier,
            "room_code": self.room_code,
        }


class ResidentResult(BaseModel):
    """Outcome of a resident extraction."""

    record: ResidentRecord | None = None
    error: FailureReason | None = None
    from_cache: bool = False

    @property
    def success(self) -> bool:
        return self.record is not None


class KeyCodeResult(BaseModel):
    """Outcome of a key-code extraction. Never cached."""

    codes: frozenset[str] | None = None
    error: FailureReason | None = None
    report_mode: bool = False

    @property
    def success(self) -> bool:
        return bool(self.codes)


class LogResult(BaseModel):
    """What the UI layer receives: the text to copy or the reason there is none."""

    success: bool
    text: str | None = None
    error: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
