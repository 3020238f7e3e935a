"""Bounded-concurrency worker pool with index-aligned results."""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import cast


async def run_with_concurrency[T, R](
    items: Sequence[T],
    handler: Callable[[T, int], Awaitable[R]],
    concurrency: int,
) -> list[R]:
    """Run handler over items with at most `concurrency` calls in flight.

    A fixed pool of workers claims indices from a shared cursor and writes each
    result into the slot of the index it claimed, so ``results[i]`` always
    belongs to ``items[i]`` whatever order the workers finish in.

    The claim (read cursor, advance cursor) never awaits, which makes it atomic
    under the event loop: no two workers can claim the same index.

    Raises:
        ValueError: if concurrency is below 1.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")

    results: list[R | None] = [None] * len(items)
    # Shared cursor, boxed so every worker advances the same counter.
    next_index: list[int] = [0]

    async def worker() -> None:
        while True:
            index = next_index[0]
            if index >= len(items):
                return
            next_index[0] = index + 1
            results[index] = await handler(items[index], index)

    try:
        async with asyncio.TaskGroup() as tg:
            for _ in range(min(concurrency, len(items))):
                tg.create_task(worker())
    except* Exception as eg:
        # Handlers are expected to capture their own failures; if one escapes,
        # surface the first error as a plain exception to the caller.
        raise eg.exceptions[0]

    return cast(list[R], results)
