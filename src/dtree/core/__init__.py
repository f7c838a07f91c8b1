"""
Expected-value decision tree core.

Pure in-memory structures, no I/O:
- Node variants: DecisionNode, ChanceNode, TerminalNode
- Tree: id-based editing, validity check, backward induction
- NodeData: snapshot record consumed by renderers
- NodeUpdate: typed partial update for Tree.update

Example:
    from dtree.core import Tree, example_tree

    tree = example_tree()
    assert tree.is_valid()
    tree.optimal_snapshot().expected_value  # 15.0
"""

from dtree.core.constants import PROBABILITY_TOLERANCE, ROOT_ID, UNASSIGNED_ID
from dtree.core.errors import (
    ExpectedValueError,
    InvalidUpdateError,
    RetypeError,
    TerminalChildError,
    TreeContractError,
)
from dtree.core.examples import big_example_tree, example_tree
from dtree.core.nodes import ChanceNode, DecisionNode, Node, TerminalNode, create_node
from dtree.core.tree import Tree
from dtree.core.types import NodeData, NodeType, NodeUpdate

__all__ = [
    "ChanceNode",
    "DecisionNode",
    "ExpectedValueError",
    "InvalidUpdateError",
    "Node",
    "NodeData",
    "NodeType",
    "NodeUpdate",
    "PROBABILITY_TOLERANCE",
    "ROOT_ID",
    "RetypeError",
    "TerminalChildError",
    "TerminalNode",
    "Tree",
    "TreeContractError",
    "UNASSIGNED_ID",
    "big_example_tree",
    "create_node",
    "example_tree",
]
