# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Caller-side retry with exponential backoff.

The engine never waits. Hosts that re-trigger extraction while the page is
still rendering use this to poll a bounded number of times.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol, TypeVar

from rezlog.logging import get_logger
from rezlog.settings import RetryConfig

logger = get_logger(__name__)


class _HasSuccess(Protocol):
    @property
    def success(self) -> bool: ...


R = TypeVar("R", bound=_HasSuccess)


def retry_extraction(
    func: Callable[[], R],
    config: RetryConfig | None = None,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> R:
    """Call ``func`` until its result reports success or attempts run out.

    Args:
        func: Zero-argument extraction call (e.g. a bound composer method)
        config: Attempt count and backoff (defaults when None)
        sleep: Delay function (injectable for tests)

    Returns:
        The first successful result, or the last result if none succeeded
    """
    config = config or RetryConfig()
    delay = config.initial_delay_seconds
    result = func()
    attempt = 1
    while not result.success and attempt < config.max_attempts:
        logger.debug(
            "extraction_retry",
            attempt=attempt,
            max_attempts=config.max_attempts,
            delay=delay,
        )
        sleep(delay)
        delay *= config.backoff_multiplier
        result = func()
        attempt += 1

    if not result.success:
        logger.info("extraction_retry_exhausted", attempts=attempt)
    return result
