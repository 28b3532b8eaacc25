"""Caravan - concurrent execution of dependent test trees."""

from .config import CaravanSettings
from .errors import AttemptToWriteToClosedChannel, CaravanError, DuplicateTestIdError, PipeClosedError
from .log import LogChannel, LogLevel, LogMessage, render
from .orchestrator import assert_unique_ids, execute, run
from .pipe import Pipe
from .reporter import ConsoleReporter
from .results import Ran, Result, ResultStatus, Skipped
from .runner import Runner
from .tree import TestNode, add_child, add_children, collect_ids, traverse
from .version import __version__


__all__ = [
    # Test tree
    "TestNode",
    "add_child",
    "add_children",
    "collect_ids",
    "traverse",
    # Logging
    "LogChannel",
    "LogLevel",
    "LogMessage",
    "render",
    # Execution
    "Pipe",
    "Runner",
    "Ran",
    "Skipped",
    "Result",
    "ResultStatus",
    "ConsoleReporter",
    "assert_unique_ids",
    "execute",
    "run",
    "CaravanSettings",
    # Errors
    "CaravanError",
    "AttemptToWriteToClosedChannel",
    "DuplicateTestIdError",
    "PipeClosedError",
    "__version__",
]
