"""Tests for run_with_concurrency."""

import asyncio

import pytest

from eval_express.core.pool import run_with_concurrency


class TestResultOrdering:
    """results[i] always belongs to items[i]."""

    async def test_results_aligned_with_items_despite_completion_order(self) -> None:
        delays = [0.03, 0.0, 0.02, 0.01]

        async def handler(delay: float, index: int) -> int:
            await asyncio.sleep(delay)
            return index

        results = await run_with_concurrency(
            items=delays, handler=handler, concurrency=4
        )

        assert results == [0, 1, 2, 3]

    async def test_handler_receives_item_and_index(self) -> None:
        seen: list[tuple[str, int]] = []

        async def handler(item: str, index: int) -> str:
            seen.append((item, index))
            return item.upper()

        results = await run_with_concurrency(
            items=["a", "b", "c"], handler=handler, concurrency=2
        )

        assert results == ["A", "B", "C"]
        assert sorted(seen) == [("a", 0), ("b", 1), ("c", 2)]

    async def test_empty_items_returns_empty_list(self) -> None:
        async def handler(item: int, index: int) -> int:
            return item

        results = await run_with_concurrency(items=[], handler=handler, concurrency=3)

        assert results == []


class TestConcurrencyBound:
    """At most `concurrency` handlers are in flight at once."""

    async def test_in_flight_never_exceeds_limit(self) -> None:
        in_flight = [0]
        peak = [0]

        async def handler(item: int, index: int) -> int:
            in_flight[0] += 1
            peak[0] = max(peak[0], in_flight[0])
            await asyncio.sleep(0.005)
            in_flight[0] -= 1
            return item

        await run_with_concurrency(
            items=list(range(10)), handler=handler, concurrency=3
        )

        assert peak[0] == 3

    async def test_concurrency_one_runs_in_item_order(self) -> None:
        order: list[int] = []

        async def handler(item: int, index: int) -> None:
            order.append(index)
            await asyncio.sleep(0)

        await run_with_concurrency(
            items=list(range(5)), handler=handler, concurrency=1
        )

        assert order == [0, 1, 2, 3, 4]

    async def test_each_index_handled_exactly_once(self) -> None:
        calls: list[int] = []

        async def handler(item: int, index: int) -> None:
            calls.append(index)
            await asyncio.sleep(0)

        await run_with_concurrency(
            items=list(range(20)), handler=handler, concurrency=7
        )

        assert sorted(calls) == list(range(20))

    async def test_concurrency_above_item_count_is_fine(self) -> None:
        async def handler(item: int, index: int) -> int:
            return item * 2

        results = await run_with_concurrency(
            items=[1, 2], handler=handler, concurrency=50
        )

        assert results == [2, 4]


class TestInvalidConcurrency:
    """A limit below 1 is rejected."""

    @pytest.mark.parametrize("concurrency", [0, -1])
    async def test_raises_value_error(self, concurrency: int) -> None:
        async def handler(item: int, index: int) -> int:
            return item

        with pytest.raises(ValueError):
            await run_with_concurrency(
                items=[1], handler=handler, concurrency=concurrency
            )


class TestHandlerFailure:
    """An exception escaping a handler surfaces as a plain exception."""

    async def test_first_error_is_raised_unwrapped(self) -> None:
        async def handler(item: int, index: int) -> int:
            if item == 2:
                raise RuntimeError("boom")
            return item

        with pytest.raises(RuntimeError, match="boom"):
            await run_with_concurrency(items=[1, 2, 3], handler=handler, concurrency=1)
