"""
Decision tree node variants.

Three node kinds form a closed set, discriminated by ``type``:
- DecisionNode ("DEC"): the owner picks the child with maximal expected value
- ChanceNode ("RND"): children are drawn from a probability distribution
- TerminalNode ("RES"): a leaf with a fixed payoff

Every operation works on the subtree rooted at the node it is called on and
locates its target by a depth-first search over node ids. Expected values
are computed bottom-up (backward induction) by ``optimal_snapshot``.

Example:
    root = DecisionNode(id=0, label="root")
    root.add_child(0, TerminalNode(id=1, label="Stay home", value=0))
    root.optimal_snapshot().expected_value  # 0.0
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Annotated, Any, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from dtree.core.constants import PROBABILITY_TOLERANCE, UNASSIGNED_ID
from dtree.core.errors import (
    ExpectedValueError,
    InvalidUpdateError,
    RetypeError,
    TerminalChildError,
)
from dtree.core.types import NodeData, NodeType, NodeUpdate


class Node(BaseModel, ABC):
    """Fields and recursive algorithms shared by all node variants."""

    type: NodeType
    id: int = UNASSIGNED_ID
    label: str = ""
    value: float = 0.0
    probability: Optional[float] = None
    children: List[AnyNode] = Field(default_factory=list)
    is_child_of_chance: bool = False

    # =========================================================================
    # Lookup
    # =========================================================================

    def find(self, target_id: int) -> Optional[Node]:
        """Get the node with the given id in this subtree."""
        if self.id == target_id:
            return self
        for child in self.children:
            found = child.find(target_id)
            if found is not None:
                return found
        return None

    def describe(self) -> str:
        """Human-readable description of this node."""
        return f"[{self.id}] {self.label or '<blank>'} ({NodeType(self.type).display_name})"

    # =========================================================================
    # Structural edits
    # =========================================================================

    def add_child(self, target_id: int, node: Node) -> bool:
        """
        Attach ``node`` under the node with id ``target_id``.

        Returns:
            True if the target was found in this subtree

        Raises:
            TerminalChildError: If the target is a terminal node
        """
        if self.id == target_id:
            self._attach(node)
            return True
        return any(child.add_child(target_id, node) for child in self.children)

    def _attach(self, node: Node) -> None:
        node.is_child_of_chance = False
        self.children.append(node)

    def remove_child(self, target_id: int, placeholder_id: int = UNASSIGNED_ID) -> bool:
        """
        Replace the node with id ``target_id`` by a blank terminal placeholder.

        The placeholder takes the removed node's slot, keeps its chance-child
        flag and gets ``placeholder_id`` as its id.
        """
        for index, child in enumerate(self.children):
            if child.id == target_id:
                self.children[index] = TerminalNode(
                    id=placeholder_id,
                    is_child_of_chance=child.is_child_of_chance,
                )
                return True
        return any(child.remove_child(target_id, placeholder_id) for child in self.children)

    def update_child(self, target_id: int, update: Union[NodeUpdate, Mapping[str, Any]]) -> bool:
        """
        Merge a partial update into the node with id ``target_id``.

        Raises:
            InvalidUpdateError: If the update has unknown or read-only fields,
                or sets a probability on a node outside a chance node
        """
        if self.id == target_id:
            self.apply_update(_coerce_update(target_id, update))
            return True
        return any(child.update_child(target_id, update) for child in self.children)

    def apply_update(self, update: NodeUpdate) -> None:
        changes = update.changes()
        if changes.get("probability") is not None and not self.is_child_of_chance:
            raise InvalidUpdateError(self.id, "Probability can only be set on branches of a chance node")
        for name, value in changes.items():
            setattr(self, name, value)

    def switch_type(self, target_id: int, new_type: Union[NodeType, str]) -> bool:
        """
        Rebuild the terminal node with id ``target_id`` as a decision or chance node.

        The search only matches direct children (a node is replaced in its
        parent's slot), so the node this is called on is never retyped itself.

        Raises:
            RetypeError: If the target is not a terminal node
        """
        for index, child in enumerate(self.children):
            if child.id == target_id:
                self.children[index] = child.converted_to(new_type)
                return True
        found = False
        for child in self.children:
            found = child.switch_type(target_id, new_type) or found
        return found

    def converted_to(self, new_type: Union[NodeType, str]) -> Node:
        raise RetypeError(self.id, "Only terminal nodes can change type")

    # =========================================================================
    # Validity
    # =========================================================================

    def has_valid_distribution(self) -> bool:
        """Check the probability distribution over this node's own branches."""
        return True

    def is_valid_subtree(self) -> bool:
        """Check every chance node's distribution in this subtree."""
        return self.has_valid_distribution() and all(child.is_valid_subtree() for child in self.children)

    def invalid_chance_ids(self) -> List[int]:
        """Ids of chance nodes in this subtree whose distribution is rejected."""
        ids = [] if self.has_valid_distribution() else [self.id]
        for child in self.children:
            ids.extend(child.invalid_chance_ids())
        return ids

    # =========================================================================
    # Snapshots
    # =========================================================================

    def _record(self, children: List[NodeData], **extra: Any) -> NodeData:
        return NodeData(
            id=self.id,
            label=self.label,
            value=self.value,
            type=self.type,
            is_child_of_chance=self.is_child_of_chance,
            probability=self.probability,
            children=children,
            **extra,
        )

    def snapshot(self) -> NodeData:
        """Snapshot this subtree without expected values."""
        return self._record([child.snapshot() for child in self.children])

    @abstractmethod
    def optimal_snapshot(self) -> NodeData:
        """Snapshot this subtree with expected values and optimal branches marked."""
        raise NotImplementedError


class DecisionNode(Node):
    """Choice point: its expected value is the best branch's expected value."""

    type: Literal[NodeType.DECISION] = NodeType.DECISION

    def optimal_snapshot(self) -> NodeData:
        children = [child.optimal_snapshot() for child in self.children]
        # No branches to choose from leaves the maximum at -inf.
        best = max((data.expected_value for data in children), default=-math.inf)
        for data in children:
            data.is_optimal_branch = data.expected_value == best
        return self._record(children, expected_value=self.value + best)


class ChanceNode(Node):
    """Branches are weighted by their probabilities."""

    type: Literal[NodeType.CHANCE] = NodeType.CHANCE

    def _attach(self, node: Node) -> None:
        self.children.append(node)
        node.is_child_of_chance = True

    def branch_probabilities(self) -> List[Optional[float]]:
        return [child.probability for child in self.children]

    def has_valid_distribution(self) -> bool:
        probabilities = self.branch_probabilities()
        if any(p is None or not 0.0 <= p <= 1.0 for p in probabilities):
            return False
        return abs(math.fsum(probabilities) - 1.0) <= PROBABILITY_TOLERANCE

    def optimal_snapshot(self) -> NodeData:
        children: List[NodeData] = []
        weighted = 0.0
        for child in self.children:
            data = child.optimal_snapshot()
            if child.probability is None:
                raise ExpectedValueError(child.id, "Chance branch has no probability; validate the tree first")
            if data.expected_value is None:
                raise ExpectedValueError(child.id, "Chance branch has no expected value")
            weighted += child.probability * data.expected_value
            children.append(data)
        return self._record(children, expected_value=weighted + self.value)


class TerminalNode(Node):
    """Leaf with a fixed payoff."""

    type: Literal[NodeType.TERMINAL] = NodeType.TERMINAL

    @model_validator(mode="after")
    def _terminal_is_leaf(self) -> TerminalNode:
        if self.children:
            raise ValueError("terminal nodes cannot have children")
        return self

    def _attach(self, node: Node) -> None:
        raise TerminalChildError(self.id, "Terminal nodes cannot have children; convert the node to another type first")

    def snapshot(self) -> NodeData:
        return self._record([])

    def optimal_snapshot(self) -> NodeData:
        return self._record([], expected_value=self.value)

    def converted_to(self, new_type: Union[NodeType, str]) -> Node:
        try:
            node_type = NodeType.parse(new_type)
        except ValueError as exc:
            raise RetypeError(self.id, "Cannot convert terminal node", cause=exc) from exc
        node_cls = NODE_CLASSES[node_type]
        if node_cls is TerminalNode:
            raise RetypeError(self.id, "Terminal nodes can only become decision or chance nodes")
        return node_cls(
            id=self.id,
            label=self.label,
            value=self.value,
            probability=self.probability,
            is_child_of_chance=self.is_child_of_chance,
        )


AnyNode = Annotated[Union[DecisionNode, ChanceNode, TerminalNode], Field(discriminator="type")]

NODE_CLASSES = {
    NodeType.DECISION: DecisionNode,
    NodeType.CHANCE: ChanceNode,
    NodeType.TERMINAL: TerminalNode,
}

for _cls in (Node, DecisionNode, ChanceNode, TerminalNode):
    _cls.model_rebuild()


def create_node(
    node_type: Union[NodeType, str],
    label: str = "",
    value: float = 0.0,
    probability: Optional[float] = None,
) -> Node:
    """Build an unattached node of the given type."""
    node_cls = NODE_CLASSES[NodeType.parse(node_type)]
    return node_cls(label=label, value=value, probability=probability)


def _coerce_update(node_id: int, update: Union[NodeUpdate, Mapping[str, Any]]) -> NodeUpdate:
    if isinstance(update, NodeUpdate):
        return update
    try:
        return NodeUpdate.model_validate(dict(update))
    except ValidationError as exc:
        raise InvalidUpdateError(node_id, "Invalid node update", cause=exc) from exc


__all__ = [
    "AnyNode",
    "ChanceNode",
    "DecisionNode",
    "NODE_CLASSES",
    "Node",
    "TerminalNode",
    "create_node",
]
