"""Futures that wait for documents to become available."""

from __future__ import annotations

import asyncio
from collections import defaultdict

__all__ = ["Waiting"]


class Waiting:
    """Waiters per URI, resolved together when the URI is triggered."""

    def __init__(self) -> None:
        self._waiters: defaultdict[str, list[asyncio.Future]] = defaultdict(list)

    def insert(self, uri: str) -> asyncio.Future:
        """Register a waiter for ``uri`` and return its future."""
        future = asyncio.get_running_loop().create_future()
        self._waiters[uri].append(future)
        return future

    def remove(self, uri: str) -> None:
        """Forget all waiters for ``uri`` without resolving them."""
        self._waiters.pop(uri, None)

    def trigger(self, uri: str) -> None:
        """Resolve and forget all waiters for ``uri``."""
        for future in self._waiters.pop(uri, []):
            if not future.done():
                future.set_result(None)

    def __contains__(self, uri: object) -> bool:
        return uri in self._waiters