"""Run entry points wiring the runner to the reporter."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections import Counter
from collections.abc import Sequence
from typing import Any, NoReturn

from rich.console import Console
from rich.markup import escape

from caravan.config import CaravanSettings
from caravan.errors import DuplicateTestIdError
from caravan.pipe import Pipe
from caravan.reporter import ConsoleReporter
from caravan.results import Result
from caravan.runner import Runner
from caravan.tree import TestNode, collect_ids, count_nodes


logger = logging.getLogger(__name__)


def find_duplicate_ids(tests: Sequence[TestNode[Any]]) -> list[str]:
    """Return every id used by more than one node, in first-seen order."""
    counts = Counter(collect_ids(tests))
    return [test_id for test_id, count in counts.items() if count > 1]


def assert_unique_ids(tests: Sequence[TestNode[Any]]) -> None:
    """Raise DuplicateTestIdError if any id appears twice in the forest."""
    duplicates = find_duplicate_ids(tests)
    if duplicates:
        raise DuplicateTestIdError(duplicates)


def exit_status(failures: int, max_exit_status: int = 255) -> int:
    """Map a failure count to a process exit status that never wraps to 0."""
    return min(failures, max_exit_status)


async def execute(
    tests: Sequence[TestNode[Any]],
    init_state: Any,
    *,
    console: Console | None = None,
    settings: CaravanSettings | None = None,
) -> int:
    """Run the forest and report results; return the number of failed tests.

    Raises:
        DuplicateTestIdError: If ids are not unique. Nothing is executed.
    """
    settings = settings or CaravanSettings()
    assert_unique_ids(tests)

    results: Pipe[Result] = Pipe()
    runner: Runner[Any] = Runner(results)
    reporter = ConsoleReporter(console, max_width=settings.table_max_width)

    logger.info("Running %d test(s)", count_nodes(tests))
    runner_task = asyncio.create_task(runner.run(tests, init_state))
    failures = await reporter.consume(results)
    # Surfaces programming errors raised while walking the forest.
    await runner_task
    logger.info("Run completed with %d failure(s)", failures)
    return failures


def run(
    tests: Sequence[TestNode[Any]],
    init_state: Any,
    *,
    console: Console | None = None,
    settings: CaravanSettings | None = None,
) -> NoReturn:
    """Run the forest, print the report and exit with the failure count.

    Duplicate ids are reported on stderr and end the process with status 1
    before any test is executed.
    """
    settings = settings or CaravanSettings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    if console is None:
        console = Console(no_color=not settings.color)

    try:
        assert_unique_ids(tests)
    except DuplicateTestIdError as e:
        logger.error("Duplicate test IDs: %s", ", ".join(e.ids))
        Console(stderr=True, no_color=not settings.color).print(f"[red]{escape(str(e))}[/red]", highlight=False)
        sys.exit(1)

    failures = asyncio.run(execute(tests, init_state, console=console, settings=settings))
    sys.exit(exit_status(failures, settings.max_exit_status))
