"""Closable single-producer/single-consumer pipe."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Any, Generic, TypeVar

from caravan.errors import PipeClosedError


T = TypeVar("T")

_EOF = object()


class Pipe(Generic[T]):
    """An unbounded asyncio queue with a definite close signal.

    Writes never suspend. Reading with ``async for`` suspends until a value is
    available and stops once the pipe has been closed and every value written
    before the close has been consumed.

    Example:
        pipe: Pipe[int] = Pipe()
        pipe.write(1)
        pipe.close()
        assert await pipe.to_list() == [1]
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._closed = False
        self._drained = False

    @property
    def is_closed(self) -> bool:
        """Whether the pipe still accepts writes."""
        return self._closed

    def write(self, item: T) -> None:
        """Enqueue a value without waiting for the reader."""
        if self._closed:
            raise PipeClosedError("Cannot write to a closed pipe")
        self._queue.put_nowait(item)

    def close(self) -> None:
        """Stop accepting writes. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_EOF)

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        if self._drained:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _EOF:
            self._drained = True
            raise StopAsyncIteration
        return item

    async def to_list(self) -> list[T]:
        """Read until the pipe is closed and return everything read, in order."""
        return [item async for item in self]
