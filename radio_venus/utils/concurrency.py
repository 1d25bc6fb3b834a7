"""Concurrency primitives for the two execution regimes of a curation run.

1. **gather_in_batches** -- enrichment runs candidates in fixed-size
   batches.  Every call inside a batch fans out with ``asyncio.gather`` and
   the whole batch is awaited before the next one starts, which bounds the
   number of in-flight external requests at ``batch_size``.

2. **RequestThrottle / polite_pause** -- verification and discovery are
   sequential and sleep between requests.  ``RequestThrottle`` enforces a
   minimum interval per provider instance (MusicBrainz 1 req/s, Wikipedia,
   Last.fm); ``polite_pause`` is the explicit delay between records.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import structlog

from radio_venus.utils.errors import PipelineError
from radio_venus.utils.logging import get_logger

_T = TypeVar("_T")
_R = TypeVar("_R")

_logger: structlog.BoundLogger = get_logger(__name__)


class RequestThrottle:
    """Enforce a minimum interval between successive requests.

    Parameters
    ----------
    min_interval:
        Seconds that must elapse between two calls to :meth:`wait`.
    """

    def __init__(self, min_interval: float) -> None:
        self._min_interval = min_interval
        self._last_request_time: float = 0.0
        self._lock = asyncio.Lock()

    @property
    def min_interval(self) -> float:
        return self._min_interval

    async def wait(self) -> None:
        """Sleep until the minimum interval since the previous call has passed."""
        async with self._lock:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()


async def polite_pause(seconds: float) -> None:
    """Explicit politeness delay between sequential external requests."""
    if seconds > 0:
        await asyncio.sleep(seconds)


async def gather_in_batches(
    items: Sequence[_T],
    worker: Callable[[_T], Awaitable[_R]],
    batch_size: int = 5,
    on_batch_done: Callable[[int, int], None] | None = None,
) -> list[_R | BaseException]:
    """Apply *worker* to every item in fixed-size concurrent batches.

    All calls of one batch are awaited together before the next batch is
    started.  Exceptions are returned in place of results so one failing
    candidate never cancels its batch siblings; a :class:`PipelineError`
    is re-raised once its batch has settled.

    Parameters
    ----------
    items:
        Inputs, processed in order.
    worker:
        Async function applied to each item.
    batch_size:
        Number of items in flight at once.
    on_batch_done:
        Optional callback ``(completed, total)`` invoked after each batch.

    Returns
    -------
    list
        One result (or exception) per item, in input order.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    results: list[_R | BaseException] = []
    total = len(items)
    for start in range(0, total, batch_size):
        batch = items[start:start + batch_size]
        batch_results = await asyncio.gather(
            *(worker(item) for item in batch), return_exceptions=True
        )
        for item, result in zip(batch, batch_results):
            if isinstance(result, (PipelineError, asyncio.CancelledError)):
                raise result
            if isinstance(result, BaseException):
                _logger.warning("batch_item_failed", item=repr(item)[:120], error=str(result))
        results.extend(batch_results)
        if on_batch_done is not None:
            on_batch_done(min(start + batch_size, total), total)
    return results
