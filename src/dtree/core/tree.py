"""
Expected-value decision tree.

The Tree owns the root node and the id counter and routes every edit to the
node with a given id:
- insert: attach a new node (it receives the next id)
- delete: blank out a node, or reset the whole tree when the root is deleted
- update: merge a partial set of fields into a node
- switch_type: turn a terminal node into a decision or chance node

Trees may pass through invalid states while being edited. Check
``is_valid()`` before asking for ``optimal_snapshot()``.

Example:
    tree = Tree()
    tree.insert(ROOT_ID, ChanceNode(label="Go", value=-5))          # id 1
    tree.insert(1, TerminalNode(label="Rain", value=-20, probability=0.2))
    tree.insert(1, TerminalNode(label="Sun", value=30, probability=0.8))
    tree.insert(ROOT_ID, TerminalNode(label="Stay"))
    if tree.is_valid():
        policy = tree.optimal_policy()                               # [1]
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, PrivateAttr

from dtree.core.constants import PLACEHOLDER_BRANCHES, ROOT_ID, ROOT_LABEL
from dtree.core.errors import RetypeError
from dtree.core.nodes import DecisionNode, Node, TerminalNode
from dtree.core.types import NodeData, NodeType, NodeUpdate
from dtree.utils.logging import log_calls

logger = logging.getLogger(__name__)


def new_root() -> DecisionNode:
    """Create the default root: an empty decision node with id 0."""
    return DecisionNode(id=ROOT_ID, label=ROOT_LABEL)


class Tree(BaseModel):
    """Rooted decision tree with id-based editing."""

    root: DecisionNode = Field(default_factory=new_root)

    # Last id handed out; the root consumes 0.
    _node_counter: int = PrivateAttr(default=ROOT_ID)

    # =========================================================================
    # Node Access
    # =========================================================================

    @property
    def next_id(self) -> int:
        """Id the next inserted node will receive."""
        return self._node_counter + 1

    def generate_node_id(self) -> int:
        """Hand out the next id. Ids are never reused, even across resets."""
        self._node_counter += 1
        return self._node_counter

    def find(self, node_id: int) -> Optional[Node]:
        """Get a node by id."""
        return self.root.find(node_id)

    # =========================================================================
    # Node Management
    # =========================================================================

    @log_calls(method=True)
    def insert(self, parent_id: int, node: Node) -> bool:
        """
        Give ``node`` the next id and attach it under ``parent_id``.

        Returns:
            False if no node has id ``parent_id``. The tree is unchanged, but
            ``node`` still receives (and consumes) the next id.

        Raises:
            TerminalChildError: If the parent is a terminal node
        """
        node.id = self.generate_node_id()
        inserted = self.root.add_child(parent_id, node)
        if not inserted:
            logger.debug("Parent %s not found, node %s not attached", parent_id, node.id)
        return inserted

    @log_calls(method=True)
    def delete(self, node_id: int) -> bool:
        """
        Blank out the node with id ``node_id``.

        The node's slot is taken by an empty terminal placeholder with a fresh
        id. Deleting the root resets the tree to a lone root node.
        """
        if node_id == ROOT_ID:
            logger.info("Resetting tree to an empty root")
            self.root = new_root()
            return True
        placeholder_id = self.next_id
        removed = self.root.remove_child(node_id, placeholder_id)
        if removed:
            self._node_counter = placeholder_id
        else:
            logger.debug("Node %s not found, nothing deleted", node_id)
        return removed

    @log_calls(method=True)
    def update(self, node_id: int, data: Union[NodeUpdate, Mapping[str, Any]]) -> bool:
        """
        Merge a partial update into the node with id ``node_id``.

        Raises:
            InvalidUpdateError: If the update cannot apply to that node
        """
        updated = self.root.update_child(node_id, data)
        if not updated:
            logger.debug("Node %s not found, nothing updated", node_id)
        return updated

    @log_calls(method=True)
    def switch_type(self, node_id: int, new_type: Union[NodeType, str]) -> bool:
        """
        Turn a terminal node into a decision or chance node.

        The converted node keeps its id, label, value and probability and gets
        two blank terminal branches.

        Raises:
            RetypeError: If the node is not terminal (the root never is)
        """
        if node_id == self.root.id:
            raise RetypeError(node_id, "The root is a decision node and cannot change type")
        if not self.root.switch_type(node_id, new_type):
            logger.debug("Node %s not found, type unchanged", node_id)
            return False
        for _ in range(PLACEHOLDER_BRANCHES):
            self.insert(node_id, TerminalNode())
        return True

    # =========================================================================
    # Queries
    # =========================================================================

    def is_valid(self) -> bool:
        """Check that every chance node carries a proper probability distribution."""
        return self.root.is_valid_subtree()

    def invalid_chance_ids(self) -> List[int]:
        """Ids of chance nodes whose branch probabilities are rejected."""
        return self.root.invalid_chance_ids()

    def snapshot(self) -> NodeData:
        """Snapshot of the whole tree without expected values."""
        return self.root.snapshot()

    def optimal_snapshot(self) -> NodeData:
        """
        Snapshot of the whole tree with expected values and optimal branches.

        Raises:
            ExpectedValueError: If a chance branch has no probability
        """
        return self.root.optimal_snapshot()

    def optimal_policy(self) -> List[int]:
        """Ids of all branches marked optimal, in pre-order."""
        return [data.id for data in self.optimal_snapshot().walk() if data.is_optimal_branch]

    def describe(self) -> str:
        """One line per node, indented by depth."""
        lines: List[str] = []

        def _visit(node: Node, depth: int) -> None:
            lines.append("  " * depth + node.describe())
            for child in node.children:
                _visit(child, depth + 1)

        _visit(self.root, 0)
        return "\n".join(lines)


__all__ = ["Tree", "new_root"]
