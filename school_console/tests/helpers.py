"""Shared helpers for driving the data units from tests.

``Gate`` stands in for a backend operation whose calls stay pending until the
test settles them, which is what makes out-of-order completion reproducible.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass
class PendingCall:
    args: Tuple[Any, ...]
    kwargs: Dict[str, Any]
    future: asyncio.Future = field(repr=False)


class Gate:
    """Callable operation; every call returns a future the test resolves."""

    def __init__(self) -> None:
        self.calls: List[PendingCall] = []

    def __call__(self, *args: Any, **kwargs: Any) -> asyncio.Future:
        future = asyncio.get_running_loop().create_future()
        self.calls.append(PendingCall(args, kwargs, future))
        return future

    @property
    def count(self) -> int:
        return len(self.calls)

    def resolve(self, index: int, value: Any) -> None:
        self.calls[index].future.set_result(value)

    def fail(self, index: int, exc: BaseException) -> None:
        self.calls[index].future.set_exception(exc)


async def settle(rounds: int = 5) -> None:
    """Let scheduled tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


def run(coro) -> Any:
    """Run ``coro`` on a fresh event loop (plain pytest, no async plugin)."""
    return asyncio.run(coro)
