"""Unit tests for batching, throttling and politeness helpers."""

from __future__ import annotations

import asyncio
import time

import pytest

from radio_venus.utils.concurrency import (
    RequestThrottle,
    gather_in_batches,
    polite_pause,
)
from radio_venus.utils.errors import PipelineError


class TestGatherInBatches:
    @pytest.mark.asyncio
    async def test_bounded_in_flight_and_ordered(self) -> None:
        in_flight = 0
        peak = 0

        async def worker(item: int) -> int:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0)
            in_flight -= 1
            return item * 10

        progress: list[tuple[int, int]] = []
        results = await gather_in_batches(
            [1, 2, 3, 4, 5],
            worker,
            batch_size=2,
            on_batch_done=lambda done, total: progress.append((done, total)),
        )

        assert results == [10, 20, 30, 40, 50]
        assert peak == 2
        assert progress == [(2, 5), (4, 5), (5, 5)]

    @pytest.mark.asyncio
    async def test_failures_are_returned_in_place(self) -> None:
        async def worker(item: int) -> int:
            if item == 2:
                raise ValueError("bad item")
            return item

        results = await gather_in_batches([1, 2, 3], worker, batch_size=3)

        assert results[0] == 1
        assert isinstance(results[1], ValueError)
        assert results[2] == 3

    @pytest.mark.asyncio
    async def test_pipeline_error_is_raised(self) -> None:
        async def worker(item: int) -> int:
            raise PipelineError("abort")

        with pytest.raises(PipelineError):
            await gather_in_batches([1], worker)

    @pytest.mark.asyncio
    async def test_invalid_batch_size(self) -> None:
        async def worker(item: int) -> int:
            return item

        with pytest.raises(ValueError):
            await gather_in_batches([1], worker, batch_size=0)


class TestRequestThrottle:
    @pytest.mark.asyncio
    async def test_enforces_minimum_interval(self) -> None:
        throttle = RequestThrottle(0.05)
        start = time.monotonic()
        await throttle.wait()
        await throttle.wait()
        assert time.monotonic() - start >= 0.045
        assert throttle.min_interval == 0.05

    @pytest.mark.asyncio
    async def test_zero_interval_does_not_sleep(self) -> None:
        throttle = RequestThrottle(0)
        start = time.monotonic()
        for _ in range(5):
            await throttle.wait()
        assert time.monotonic() - start < 0.05

    @pytest.mark.asyncio
    async def test_polite_pause_ignores_non_positive(self) -> None:
        await polite_pause(0)
        await polite_pause(-1)
