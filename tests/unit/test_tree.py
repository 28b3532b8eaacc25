"""Tests for caravan.tree module."""

from caravan.tree import TestNode, add_child, add_children, collect_ids, count_nodes, traverse


def noop(state, *, log):
    return state


def node(test_id: str, *children: TestNode) -> TestNode:
    return TestNode(test_id, noop, children)


class TestComposition:
    def test_add_child_prepends(self):
        parent = node("p", node("a"))
        updated = add_child(parent, node("b"))

        assert [c.id for c in updated.children] == ["b", "a"]

    def test_add_children_appends(self):
        parent = node("p", node("a"))
        updated = add_children(parent, [node("b"), node("c")])

        assert [c.id for c in updated.children] == ["a", "b", "c"]

    def test_composition_does_not_mutate_parent(self):
        parent = node("p")
        updated = parent.add_child(node("a"))

        assert parent.children == ()
        assert updated.id == parent.id
        assert updated.case is parent.case

    def test_rshift_operator(self):
        tree = node("p") >> node("a") >> [node("b"), node("c")]

        assert [c.id for c in tree.children] == ["a", "b", "c"]

    def test_children_list_is_stored_as_tuple(self):
        parent = TestNode("p", noop, [node("a")])
        assert isinstance(parent.children, tuple)


class TestTraversal:
    def test_parent_before_children_in_list_order(self):
        forest = [
            node("a", node("a1", node("a1x")), node("a2")),
            node("b", node("b1")),
        ]

        assert [n.id for n in traverse(forest)] == ["a", "a1", "a1x", "a2", "b", "b1"]

    def test_collect_ids_keeps_duplicates(self):
        forest = [node("x", node("y")), node("x")]

        assert sorted(collect_ids(forest)) == ["x", "x", "y"]

    def test_empty_forest(self):
        assert collect_ids([]) == []
        assert count_nodes([]) == 0

    def test_count_nodes(self):
        forest = [node("a", node("b", node("c"))), node("d")]
        assert count_nodes(forest) == 4
