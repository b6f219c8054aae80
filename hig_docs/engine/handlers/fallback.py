"""Ordered fallback chain of search strategies.

Each strategy returns results or None. An exception, None or an empty
list means "try the next one"; failures are logged, never raised.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPTY_STRATEGY = "empty"

# Sync or async zero-argument callable returning a list or None
Strategy = Callable[[], Any]


class FallbackChain(Generic[T]):
    """Run named strategies in order until one produces results."""

    def __init__(self, strategies: list[tuple[str, Strategy]]):
        self.strategies = strategies

    async def run(self) -> tuple[list[T], str]:
        """Run the chain.

        Returns:
            Tuple of (results, name of the strategy that produced them);
            ``([], "empty")`` when every strategy came up empty.
        """
        for name, strategy in self.strategies:
            try:
                results = strategy()
                if inspect.isawaitable(results):
                    results = await results
            except Exception as e:
                logger.warning(f"Fallback strategy '{name}' failed: {e}")
                continue
            if results:
                logger.debug(f"Fallback chain resolved by '{name}' ({len(results)} results)")
                return list(results), name
        return [], EMPTY_STRATEGY
