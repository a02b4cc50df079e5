"""Result handling policies for resolution steps.

A *required* step propagates its failure to the caller. A *best-effort* step
logs the failure and degrades to an absent value so that optional enrichment
never fails the enclosing call.
"""

from collections.abc import Callable
from typing import TypeVar

from loguru import logger

from src.authbridge.core.errors import ResolutionError

T = TypeVar("T")


def required(step: Callable[[], T]) -> T:
    """Run ``step``; any :class:`ResolutionError` propagates unchanged."""
    return step()


def best_effort(step: Callable[[], T], description: str) -> T | None:
    """Run ``step``, turning a :class:`ResolutionError` into ``None``."""
    try:
        return step()
    except ResolutionError as e:
        logger.bind(error_kind=e.kind.value).warning(
            "Skipping {}: {}", description, e.message
        )
        return None
