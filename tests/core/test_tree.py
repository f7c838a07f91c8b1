"""
Tests for the Tree editing API.

Tests cover:
- id assignment on insert
- delete (placeholder and full reset)
- update and switch_type routing
- logging of no-op edits
"""

import logging

import pytest

from dtree.core.constants import ROOT_ID, ROOT_LABEL
from dtree.core.errors import InvalidUpdateError, RetypeError, TerminalChildError
from dtree.core.nodes import ChanceNode, DecisionNode, TerminalNode
from dtree.core.tree import Tree
from dtree.core.types import NodeType


class TestTreeCreation:
    """Tests for a fresh tree."""

    def test_fresh_tree_has_root_only(self, empty_tree):
        root = empty_tree.root

        assert isinstance(root, DecisionNode)
        assert root.id == ROOT_ID
        assert root.label == ROOT_LABEL
        assert root.children == []

    def test_fresh_tree_is_valid(self, empty_tree):
        assert empty_tree.is_valid()

    def test_first_insert_gets_id_one(self, empty_tree):
        assert empty_tree.next_id == 1


class TestInsert:
    """Tests for Tree.insert."""

    def test_ids_strictly_increase(self, empty_tree):
        nodes = [DecisionNode(label=f"n{i}") for i in range(4)]
        empty_tree.insert(ROOT_ID, nodes[0])
        empty_tree.insert(nodes[0].id, nodes[1])
        empty_tree.insert(ROOT_ID, nodes[2])
        empty_tree.insert(nodes[1].id, nodes[3])

        assert [n.id for n in nodes] == [1, 2, 3, 4]
        assert empty_tree.root.id == ROOT_ID

    def test_ids_never_reused(self, empty_tree):
        """Ids survive deletions and resets without being handed out twice."""
        seen = set()
        for _ in range(3):
            node = TerminalNode()
            empty_tree.insert(ROOT_ID, node)
            seen.add(node.id)
        empty_tree.delete(2)
        empty_tree.delete(ROOT_ID)
        node = TerminalNode()
        empty_tree.insert(ROOT_ID, node)

        assert node.id not in seen
        assert node.id > max(seen)

    def test_unknown_parent_is_noop(self, tree):
        before = tree.snapshot()

        assert tree.insert(99, TerminalNode(label="orphan")) is False
        assert tree.snapshot() == before

    def test_unknown_parent_still_consumes_id(self, tree):
        """The rejected node keeps the id it was given, which is never handed out again."""
        expected_id = tree.next_id
        orphan = TerminalNode(label="orphan")

        tree.insert(99, orphan)

        assert orphan.id == expected_id
        assert tree.next_id == expected_id + 1

    def test_insert_under_terminal_raises(self, tree):
        with pytest.raises(TerminalChildError):
            tree.insert(2, TerminalNode())

    def test_insert_under_chance_flags_child(self, tree):
        node = TerminalNode(probability=0.0)
        tree.insert(1, node)

        assert node.is_child_of_chance is True
        assert tree.find(node.id) is node

    def test_insert_returns_true(self, empty_tree):
        assert empty_tree.insert(ROOT_ID, TerminalNode()) is True


class TestDelete:
    """Tests for Tree.delete."""

    def test_delete_blanks_node_in_place(self, tree):
        """The deleted node's slot holds a blank terminal with a fresh id."""
        next_id = tree.next_id

        assert tree.delete(3) is True

        placeholder = tree.root.children[0].children[1]
        assert isinstance(placeholder, TerminalNode)
        assert placeholder.id == next_id
        assert placeholder.label == ""
        assert placeholder.is_child_of_chance is True
        assert tree.find(3) is None
        assert tree.find(4) is None
        assert tree.next_id == next_id + 1

    def test_placeholder_is_editable(self, tree):
        """The placeholder can be found and updated by its new id."""
        tree.delete(3)
        placeholder_id = tree.root.children[0].children[1].id

        assert tree.update(placeholder_id, {"label": "Cloudy", "probability": 0.8}) is True
        assert tree.is_valid()

    def test_delete_unknown_is_noop(self, tree):
        before = tree.snapshot()
        next_id = tree.next_id

        assert tree.delete(99) is False
        assert tree.snapshot() == before
        assert tree.next_id == next_id

    def test_delete_root_resets(self, tree):
        """Deleting the root leaves a lone, valid root."""
        assert tree.delete(ROOT_ID) is True

        assert tree.root.id == ROOT_ID
        assert tree.root.label == ROOT_LABEL
        assert tree.root.children == []
        assert tree.is_valid()
        assert tree.find(1) is None

    def test_reset_is_logged(self, tree, caplog):
        with caplog.at_level(logging.INFO, logger="dtree.core.tree"):
            tree.delete(ROOT_ID)

        assert "Resetting tree" in caplog.text


class TestUpdate:
    """Tests for Tree.update."""

    def test_update_fields(self, tree):
        assert tree.update(4, {"value": 50}) is True

        assert tree.find(4).value == 50
        assert tree.find(4).label == "Have lunch"

    def test_update_root(self, tree):
        assert tree.update(ROOT_ID, {"label": "Weekend"}) is True
        assert tree.root.label == "Weekend"

    def test_update_unknown_is_noop(self, tree, caplog):
        with caplog.at_level(logging.DEBUG, logger="dtree.core.tree"):
            assert tree.update(99, {"label": "x"}) is False

        assert "Node 99 not found" in caplog.text

    def test_update_rejects_probability_outside_chance(self, tree):
        with pytest.raises(InvalidUpdateError):
            tree.update(6, {"probability": 0.5})


class TestSwitchType:
    """Tests for Tree.switch_type."""

    def test_to_decision_adds_two_placeholders(self, tree):
        """A converted node keeps its fields and gets two blank terminals."""
        next_id = tree.next_id

        assert tree.switch_type(2, "DEC") is True

        node = tree.find(2)
        assert isinstance(node, DecisionNode)
        assert node.label == "Rain"
        assert node.value == -20
        assert node.probability == 0.2
        assert [c.id for c in node.children] == [next_id, next_id + 1]
        assert all(isinstance(c, TerminalNode) for c in node.children)
        assert all(c.label == "" and c.value == 0 for c in node.children)

    def test_to_chance_flags_placeholders(self, tree):
        """Placeholders under a new chance node are chance children without probabilities."""
        tree.switch_type(6, NodeType.CHANCE)

        node = tree.find(6)
        assert isinstance(node, ChanceNode)
        assert all(c.is_child_of_chance for c in node.children)
        assert not tree.is_valid()

    def test_non_terminal_raises(self, tree):
        with pytest.raises(RetypeError):
            tree.switch_type(3, "RND")

    def test_root_raises(self, tree):
        with pytest.raises(RetypeError, match="root"):
            tree.switch_type(ROOT_ID, "RND")

    def test_unknown_is_noop(self, tree):
        before = tree.snapshot()

        assert tree.switch_type(99, "DEC") is False
        assert tree.snapshot() == before

    def test_failed_retype_inserts_nothing(self, tree):
        next_id = tree.next_id

        with pytest.raises(RetypeError):
            tree.switch_type(1, "DEC")

        assert tree.next_id == next_id


class TestDescribe:
    """Tests for Tree.describe."""

    def test_indented_outline(self, tree):
        lines = tree.describe().splitlines()

        assert lines[0] == "[0] root (decision)"
        assert lines[1] == "  [1] Go (chance)"
        assert lines[3] == "    [3] Sunny (decision)"
        assert lines[-1] == "  [6] Not go (terminal)"
        assert len(lines) == 7


def test_tree_with_only_root_has_no_branches():
    """A lone root snapshot has no children."""
    assert Tree().snapshot().children == []
