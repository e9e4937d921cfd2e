# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Boundary between the engine and the UI/clipboard layer.

Every method returns a ``LogResult``; nothing raised by extraction reaches
UI code.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from structlog.contextvars import bound_contextvars

from rezlog.engine import ExtractionEngine
from rezlog.formatting import lockout_log_entry, package_label, package_log_entry, staff_initials
from rezlog.logging import configure_logging, get_logger
from rezlog.models import FailureReason, LogResult, ResidentRecord, StaffIdentity
from rezlog.scope.base import TextScope
from rezlog.settings import Settings

logger = get_logger(__name__)


def _record_data(record: ResidentRecord, staff: StaffIdentity | None) -> dict[str, Any]:
    return {
        "full_name": record.full_name,
        "identifier": record.identifier,
        "room_code": record.room_code,
        "staff_name": staff.full_name if staff else None,
        "staff_initials": staff_initials(staff),
    }


class LogComposer:
    """Build the strings staff paste into the desk log."""

    def __init__(self, engine: ExtractionEngine | None = None, *, settings: Settings | None = None) -> None:
        """Initialize composer.

        Args:
            engine: Engine to extract with. When None the composer is the
                entry point: it configures logging and builds an engine
                from ``settings``.
            settings: Settings for the self-built engine (environment if None)
        """
        if engine is None:
            settings = settings or Settings()
            configure_logging(settings)
            engine = ExtractionEngine(settings.engine)
        self.engine = engine

    def package_log(
        self,
        document: TextScope,
        package_count: int | None = None,
        now: datetime | None = None,
    ) -> LogResult:
        """Package pickup line; the count defaults to the parcels on screen, else 1."""
        with bound_contextvars(log_action="package_log"):
            try:
                resident = self.engine.extract_resident(document)
                if resident.record is None:
                    return self._failure(resident.error)
                staff = self.engine.extract_staff(document)
                count = package_count or self.engine.count_parcels(document) or 1
                text = package_log_entry(resident.record, staff, count, now)
                data = _record_data(resident.record, staff) | {"package_count": count}
                return LogResult(success=True, text=text, data=data)
            except Exception as e:
                logger.exception("package_log_failed", error=str(e))
                return LogResult(success=False, error=str(e))

    def lockout_log(self, document: TextScope, now: datetime | None = None) -> LogResult:
        """Lockout key issuance line for the resident on screen."""
        with bound_contextvars(log_action="lockout_log"):
            try:
                resident = self.engine.extract_resident(document)
                if resident.record is None:
                    return self._failure(resident.error)
                keys = self.engine.extract_key_codes(document, resident.record)
                if not keys.codes:
                    return self._failure(keys.error or FailureReason.NO_KEYS_FOUND)
                staff = self.engine.extract_staff(document)
                text = lockout_log_entry(resident.record, keys.codes, staff, now)
                data = _record_data(resident.record, staff) | {
                    "key_codes": sorted(keys.codes),
                    "report_mode": keys.report_mode,
                }
                return LogResult(success=True, text=text, data=data)
            except Exception as e:
                logger.exception("lockout_log_failed", error=str(e))
                return LogResult(success=False, error=str(e))

    def package_label(self, document: TextScope) -> LogResult:
        with bound_contextvars(log_action="package_label"):
            try:
                resident = self.engine.extract_resident(document)
                if resident.record is None:
                    return self._failure(resident.error)
                text = package_label(resident.record)
                return LogResult(success=True, text=text, data=_record_data(resident.record, None))
            except Exception as e:
                logger.exception("package_label_failed", error=str(e))
                return LogResult(success=False, error=str(e))

    @staticmethod
    def _failure(reason: FailureReason | None) -> LogResult:
        reason = reason or FailureReason.RESIDENT_NOT_FOUND
        logger.info("log_not_produced", reason=reason.name)
        return LogResult(success=False, error=str(reason), data={"reason": reason.name})
