"""Fan-out/fan-in helpers for fixed-size batches of independent coroutines.

Both combinators start every task before awaiting any of them and return
results ordered by the factory index, regardless of completion order.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, List, Sequence, TypeVar

T = TypeVar("T")

TaskFactory = Callable[[], Awaitable[T]]


async def gather_fail_fast(factories: Sequence[TaskFactory[T]]) -> List[T]:
    """Run all tasks concurrently; raise the first failure.

    Tasks still pending when one fails are cancelled and awaited so nothing
    is left running in the background.
    """
    tasks = [asyncio.ensure_future(factory()) for factory in factories]
    if not tasks:
        return []
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        for task in tasks:
            if task in done and task.exception() is not None:
                raise task.exception()
        return [task.result() for task in tasks]
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


async def gather_isolated(
    factories: Sequence[TaskFactory[T]],
    fallback: Callable[[int, BaseException], T],
) -> List[T]:
    """Run all tasks concurrently; replace each failure with `fallback(index, exc)`."""
    tasks = [asyncio.ensure_future(factory()) for factory in factories]
    outcomes: List[Any] = await asyncio.gather(*tasks, return_exceptions=True)
    results: List[T] = []
    for index, outcome in enumerate(outcomes):
        if isinstance(outcome, asyncio.CancelledError):
            raise outcome
        if isinstance(outcome, BaseException):
            results.append(fallback(index, outcome))
        else:
            results.append(outcome)
    return results
