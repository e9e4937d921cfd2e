# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shape checks that stand between extraction and formatting."""

from __future__ import annotations

from pydantic import ValidationError

from rezlog.cache import ExtractionCache
from rezlog.constants import DEFAULT_MAX_CONSECUTIVE_FAILURES
from rezlog.logging import get_logger
from rezlog.models import CandidateRecord, ResidentRecord

logger = get_logger(__name__)


class RecordValidator:
    """Accept or reject candidate records, feeding accepted ones to the cache.

    A rejected candidate never evicts a still-valid cached record. After
    ``max_consecutive_failures`` rejections in a row the cache is cleared
    anyway, so a wedged entry cannot outlive a broken page indefinitely.
    """

    def __init__(
        self,
        cache: ExtractionCache,
        max_consecutive_failures: int = DEFAULT_MAX_CONSECUTIVE_FAILURES,
    ) -> None:
        self._cache = cache
        self.max_consecutive_failures = max_consecutive_failures
        self.consecutive_failures = 0

    @staticmethod
    def explain(candidate: CandidateRecord) -> list[str]:
        """Reasons ``candidate`` would be rejected; empty when it is valid."""
        try:
            ResidentRecord.model_validate(candidate.to_record_data())
        except ValidationError as e:
            return [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        return []

    def validate(self, candidate: CandidateRecord, signature: str) -> ResidentRecord | None:
        """Return a ResidentRecord if every field has the right shape, else None.

        Args:
            candidate: Extracted, unvalidated fields
            signature: Profile signature computed from the current screen
        """
        try:
            record = ResidentRecord.model_validate(candidate.to_record_data())
        except ValidationError as e:
            self.record_failure([err["msg"] for err in e.errors()])
            return None

        self.consecutive_failures = 0
        self._cache.put(record, signature)
        logger.debug("record_validated", sources=candidate.sources)
        return record

    def record_failure(self, reasons: list[str] | None = None) -> None:
        """Count a failed extraction; clear the cache once the limit is reached."""
        self.consecutive_failures += 1
        logger.info(
            "record_rejected",
            failures=self.consecutive_failures,
            reasons=reasons or [],
        )
        if self.consecutive_failures >= self.max_consecutive_failures:
            logger.warning("validation_failure_limit_reached", failures=self.consecutive_failures)
            self._cache.invalidate()
            self.consecutive_failures = 0
