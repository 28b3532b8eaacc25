"""Exceptions raised by the caravan engine."""

from collections.abc import Sequence


class CaravanError(Exception):
    """Base class for engine errors."""


class AttemptToWriteToClosedChannel(CaravanError):
    """A message was posted to a log channel after it was finalized.

    This is a programming error: either the engine or a case function kept a
    reference to a channel past the lifetime of its test execution.
    """


class PipeClosedError(CaravanError):
    """A value was written to a pipe after it was closed."""


class DuplicateTestIdError(CaravanError):
    """Two or more nodes in a forest share the same id."""

    def __init__(self, ids: Sequence[str]) -> None:
        self.ids = list(ids)
        super().__init__(f"Duplicate test IDs: {', '.join(self.ids)}")
