# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Ordered fallback chains of extraction strategies.

Every field the engine recovers is modelled as a prioritized list of
independent strategies sharing one contract, ``(scope) -> value | None``.
The first non-None result wins and partial results are never merged, so the
strategy that produced a value can always be named.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from rezlog.logging import get_logger

if TYPE_CHECKING:
    from rezlog.scope.base import TextScope

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ChainOutcome(Generic[T]):
    """Result of running a chain: the value and which strategy produced it."""

    value: T | None
    strategy: str | None = None

    @property
    def found(self) -> bool:
        return self.value is not None


class FallbackChain(Generic[T]):
    """Run named strategies in order until one produces a value."""

    def __init__(self, field: str, strategies: Sequence[tuple[str, Callable[[TextScope], T | None]]]) -> None:
        """Initialize chain.

        Args:
            field: Field name, used in logs
            strategies: (name, callable) pairs, most reliable first
        """
        if not strategies:
            raise ValueError(f"chain {field!r} needs at least one strategy")
        self.field = field
        self._strategies = list(strategies)
        self.runs = 0

    @property
    def strategy_names(self) -> list[str]:
        return [name for name, _ in self._strategies]

    def run(self, scope: TextScope) -> ChainOutcome[T]:
        """Try each strategy against ``scope``; the first non-None result wins."""
        self.runs += 1
        for name, strategy in self._strategies:
            value = strategy(scope)
            if value is not None:
                logger.debug("strategy_hit", field=self.field, strategy=name)
                return ChainOutcome(value=value, strategy=name)
            logger.debug("strategy_miss", field=self.field, strategy=name)
        return ChainOutcome(value=None)

    def __call__(self, scope: TextScope) -> T | None:
        return self.run(scope).value
