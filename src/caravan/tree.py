"""Test tree model.

A test is a node holding a case function and the tests that depend on it.
Tests form a forest: a sequence of root nodes, each the top of a tree. When a
node's case succeeds, the state it returns is handed to each of its children.

Trees are built by composition:

    root = TestNode("create", create_bucket)
    root = root >> TestNode("read", read_bucket)
    root = root >> [TestNode("update", update), TestNode("delete", delete)]
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar


StateT = TypeVar("StateT")

# A case receives the inherited state and its log channel and returns the new
# state, either directly or as an awaitable.
Case = Callable[..., Any]


@dataclass(frozen=True)
class TestNode(Generic[StateT]):
    """A single test and its dependent tests.

    Attributes:
    ----------
    id : str
        Identifier of the test, unique within a run.
    case : Callable
        ``case(state, *, log)`` returning the new state or an awaitable of it.
    children : tuple[TestNode, ...]
        Tests run with the state this test produces.
    """

    __test__ = False  # Prevent pytest from collecting this as a test class

    id: str
    case: Case
    children: tuple[TestNode[StateT], ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    def add_child(self, child: TestNode[StateT]) -> TestNode[StateT]:
        """Return a copy of this node with ``child`` prepended to its children."""
        return replace(self, children=(child, *self.children))

    def add_children(self, children: Iterable[TestNode[StateT]]) -> TestNode[StateT]:
        """Return a copy of this node with ``children`` appended to its children."""
        return replace(self, children=(*self.children, *children))

    def __rshift__(self, other: TestNode[StateT] | Iterable[TestNode[StateT]]) -> TestNode[StateT]:
        if isinstance(other, TestNode):
            return self.add_child(other)
        return self.add_children(other)


def add_child(parent: TestNode[StateT], child: TestNode[StateT]) -> TestNode[StateT]:
    """Return ``parent`` with ``child`` prepended to its children."""
    return parent.add_child(child)


def add_children(parent: TestNode[StateT], children: Iterable[TestNode[StateT]]) -> TestNode[StateT]:
    """Return ``parent`` with ``children`` appended to its children."""
    return parent.add_children(children)


def traverse(forest: Sequence[TestNode[StateT]]) -> Iterator[TestNode[StateT]]:
    """Yield every node of the forest, each parent before its children."""
    for node in forest:
        yield node
        yield from traverse(node.children)


def collect_ids(forest: Sequence[TestNode[Any]]) -> list[str]:
    """Return the id of every node in the forest, duplicates included."""
    return [node.id for node in traverse(forest)]


def count_nodes(forest: Sequence[TestNode[Any]]) -> int:
    """Return the number of nodes in the forest."""
    return sum(1 for _ in traverse(forest))
