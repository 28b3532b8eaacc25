"""Per-execution log channels.

Every test node execution gets its own ``LogChannel``. The case function
writes to it while it runs and the runner finalizes it once the case has
returned, attaching the collected messages to the node's result. Channels are
never shared between nodes and never reused.
"""

from __future__ import annotations

import asyncio
from collections.abc import Collection, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from types import TracebackType

from caravan.errors import AttemptToWriteToClosedChannel
from caravan.pipe import Pipe


class LogLevel(Enum):
    """Message level. Used for filtering only, levels carry no rank."""

    INFO = "INFO"
    DEBUG = "DEBUG"


@dataclass(frozen=True, slots=True)
class LogMessage:
    """A single timestamped message written by a case."""

    timestamp: datetime
    level: LogLevel
    payload: str

    def __str__(self) -> str:
        return f"{self.timestamp.isoformat(sep=' ')} {self.level.value} => {self.payload}"


class LogChannel:
    """Closable message queue capturing the log of one test execution.

    The channel is open from creation until ``finalize`` is called. Finalizing
    stops further writes, drains the queued messages in the order they were
    written and keeps them; later calls return the same messages.

    Used as an async context manager the channel is finalized on every exit
    path:

        async with LogChannel() as log:
            log.info("connecting")
        messages = await log.finalize()
    """

    def __init__(self) -> None:
        self._pipe: Pipe[LogMessage] = Pipe()
        self._messages: tuple[LogMessage, ...] | None = None
        self._drain_lock = asyncio.Lock()

    @property
    def is_closed(self) -> bool:
        return self._pipe.is_closed

    def log(self, level: LogLevel, payload: str) -> None:
        """Append a message at the given level."""
        if self._pipe.is_closed:
            raise AttemptToWriteToClosedChannel(f"Cannot write {level.value} message to a finalized log channel")
        self._pipe.write(LogMessage(timestamp=datetime.now(UTC), level=level, payload=payload))

    def info(self, payload: str) -> None:
        self.log(LogLevel.INFO, payload)

    def debug(self, payload: str) -> None:
        self.log(LogLevel.DEBUG, payload)

    async def finalize(self) -> tuple[LogMessage, ...]:
        """Close the channel and return its messages in write order.

        Idempotent: once closed, the stored messages are returned without
        draining again.
        """
        if self._messages is not None:
            return self._messages
        self._pipe.close()
        async with self._drain_lock:
            if self._messages is None:
                self._messages = tuple(await self._pipe.to_list())
        return self._messages

    async def __aenter__(self) -> LogChannel:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.finalize()


def render(messages: Iterable[LogMessage], levels: Collection[LogLevel] | None = None) -> str:
    """Render messages one per line as ``<timestamp> <LEVEL> => <payload>``.

    Args:
        messages: Messages in the order they should appear.
        levels: Levels to include. ``None`` includes every message.
    """
    if levels is not None:
        messages = (m for m in messages if m.level in levels)
    return "\n".join(str(m) for m in messages)
