"""Concurrent execution of a test forest."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from caravan.errors import AttemptToWriteToClosedChannel
from caravan.log import LogChannel
from caravan.results import Ran, ResultStream, Skipped
from caravan.tree import TestNode


logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")


class Runner(Generic[StateT]):
    """Walks a forest and writes one result per node to a result stream.

    Each node's case runs with the state inherited from its parent. When the
    case succeeds its children run concurrently, each with the state it
    returned. When it raises, every node below it is reported as skipped
    without being executed.

    Examples:
        results: ResultStream = Pipe()
        runner = Runner(results)
        await runner.run(tests, init_state=0)
        # results is closed once every node has been reported
    """

    def __init__(self, results: ResultStream) -> None:
        self.results = results

    async def run(self, tests: Sequence[TestNode[StateT]], init_state: StateT) -> None:
        """Run all tests and close the result stream."""
        try:
            await self._run_children(tests, init_state)
        except BaseExceptionGroup as group:
            # Nested task groups wrap the error once per tree level.
            raise _first_exception(group) from None
        finally:
            self.results.close()

    async def _run_node(self, node: TestNode[StateT], state: StateT) -> None:
        logger.debug("Running test %s", node.id)
        output: Any = None
        error: BaseException | None = None

        async with LogChannel() as log:
            start = time.perf_counter()
            try:
                output = await self._invoke(node, state, log)
            except AttemptToWriteToClosedChannel:
                raise
            except asyncio.CancelledError as e:
                # Only a cancellation aimed at the runner itself stops the node.
                task = asyncio.current_task()
                if task is not None and task.cancelling():
                    raise
                error = e
            except Exception as e:
                error = e
            elapsed = time.perf_counter() - start

        messages = await log.finalize()
        self.results.write(Ran(id=node.id, elapsed=elapsed, output=output, error=error, log=messages))

        if error is None:
            logger.debug("Test %s passed in %.3fs", node.id, elapsed)
            await self._run_children(node.children, output)
        else:
            logger.debug("Test %s failed: %r; skipping its subtree", node.id, error)
            await self._skip_children(node.children)

    async def _invoke(self, node: TestNode[StateT], state: StateT, log: LogChannel) -> StateT:
        result = node.case(state, log=log)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _run_children(self, nodes: Sequence[TestNode[StateT]], state: StateT) -> None:
        async with asyncio.TaskGroup() as group:
            for node in nodes:
                group.create_task(self._run_node(node, state))

    async def _skip_node(self, node: TestNode[StateT]) -> None:
        self.results.write(Skipped(id=node.id))
        await self._skip_children(node.children)

    async def _skip_children(self, nodes: Sequence[TestNode[StateT]]) -> None:
        async with asyncio.TaskGroup() as group:
            for node in nodes:
                group.create_task(self._skip_node(node))


def _first_exception(group: BaseExceptionGroup) -> BaseException:
    error: BaseException = group
    while isinstance(error, BaseExceptionGroup):
        error = error.exceptions[0]
    return error
