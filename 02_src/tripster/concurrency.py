"""Concurrent map-and-join helper."""

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

from .logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def gather_successes(
    func: Callable[[T], Awaitable[R | None]],
    items: Iterable[T],
) -> list[R]:
    """
    Run `func` over `items` concurrently and keep the successes.

    All calls are started together and joined; there is no per-call timeout.
    Results keep input order. A call that returns None or raises is dropped
    (exceptions are logged) without affecting the others.
    """
    items = list(items)
    if not items:
        return []

    results = await asyncio.gather(
        *[func(item) for item in items],
        return_exceptions=True,
    )

    successes: list[R] = []
    for item, result in zip(items, results):
        if isinstance(result, Exception):
            logger.error("Concurrent lookup for %r failed: %s", item, result)
            continue
        if isinstance(result, BaseException):
            raise result
        if result is not None:
            successes.append(result)
    return successes
