"""Try upstream candidates one after another until one is usable."""
from typing import Callable, Iterable, Optional, TypeVar

import requests

from ..utils import get_logger

logger = get_logger(__name__)

C = TypeVar("C")
R = TypeVar("R")


class CandidatesExhausted(Exception):
    """Every candidate failed or returned nothing usable."""

    def __init__(self, failures: list[tuple[object, str]]):
        self.failures = failures
        detail = "; ".join(f"{c}: {reason}" for c, reason in failures) or "no candidates"
        super().__init__(f"All candidates failed ({detail})")


def try_in_order(
    candidates: Iterable[C],
    attempt: Callable[[C], R],
    accept: Optional[Callable[[R], bool]] = None,
    skip: tuple[type[BaseException], ...] = (requests.RequestException, ValueError),
) -> tuple[C, R]:
    """
    Run attempt() on each candidate in order and stop at the first good result.

    Args:
        candidates: Ordered candidates, tried sequentially
        attempt: Performs the fetch for one candidate
        accept: Predicate a result must satisfy (defaults to truthiness)
        skip: Exceptions that move on to the next candidate; others propagate

    Returns:
        (candidate, result) of the first accepted attempt

    Raises:
        CandidatesExhausted: if no candidate produced an accepted result
    """
    accept = accept or bool
    failures = []
    for candidate in candidates:
        try:
            result = attempt(candidate)
        except skip as e:
            logger.warning(f"{candidate} failed: {e}")
            failures.append((candidate, str(e)))
            continue
        if accept(result):
            return candidate, result
        logger.warning(f"{candidate} returned no usable data")
        failures.append((candidate, "no usable data"))
    raise CandidatesExhausted(failures)
