"""Test result models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from caravan.log import LogMessage
from caravan.pipe import Pipe


StateT = TypeVar("StateT")


class ResultStatus(Enum):
    """Outcome of a single test node."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def is_failure(self) -> bool:
        """Check if this status counts towards the run's failures."""
        return self is ResultStatus.FAILED


@dataclass(frozen=True)
class Ran(Generic[StateT]):
    """A node whose case was executed.

    ``error`` is None when the case returned normally, in which case
    ``output`` holds the state it produced. Otherwise ``error`` is the
    exception the case raised, kept as is with its traceback and cause.
    """

    id: str
    elapsed: float
    output: StateT | None = None
    error: BaseException | None = None
    log: tuple[LogMessage, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status(self) -> ResultStatus:
        return ResultStatus.PASSED if self.ok else ResultStatus.FAILED


@dataclass(frozen=True)
class Skipped:
    """A node not executed because one of its ancestors failed."""

    id: str

    @property
    def status(self) -> ResultStatus:
        return ResultStatus.SKIPPED


Result = Ran | Skipped

# Conduit carrying results from the runner to the reporter.
ResultStream = Pipe[Result]


def format_error(error: BaseException) -> str:
    """Render an exception as ``<Type>: <message>``, or just the type when it has no message."""
    message = str(error)
    if not message:
        return type(error).__name__
    return f"{type(error).__name__}: {message}"
