"""Ready-made trees for demos and tests."""

from __future__ import annotations

import random
from typing import Optional

from dtree.core.constants import ROOT_ID
from dtree.core.nodes import ChanceNode, DecisionNode, TerminalNode
from dtree.core.tree import Tree

BIG_EXAMPLE_DECISIONS = 5
BIG_EXAMPLE_OUTCOMES = 20


def example_tree() -> Tree:
    """
    Whether to go out when it may rain.

    Tree (ids in brackets):
        root [0]
        ├── Go [1] (chance, -5)
        │   ├── Rain [2] (p=0.2, -20)
        │   └── Sunny [3] (decision, p=0.8, 20)
        │       ├── Have lunch [4] (5)
        │       └── Have dinner [5] (10)
        └── Not go [6] (0)

    Going is worth -5 + 0.2 * -20 + 0.8 * (20 + 10) = 15.
    """
    tree = Tree()
    tree.insert(ROOT_ID, ChanceNode(label="Go", value=-5))
    tree.insert(1, TerminalNode(label="Rain", value=-20, probability=0.2))
    tree.insert(1, DecisionNode(label="Sunny", value=20, probability=0.8))
    tree.insert(3, TerminalNode(label="Have lunch", value=5))
    tree.insert(3, TerminalNode(label="Have dinner", value=10))
    tree.insert(ROOT_ID, TerminalNode(label="Not go", value=0))
    return tree


def big_example_tree(seed: Optional[int] = None) -> Tree:
    """
    Wide tree for exercising renderers.

    Five decision nodes (value 10) hang off the root; twenty terminal nodes
    are attached to a random one of them, each worth 20 times its parent id.
    Pass ``seed`` for a reproducible layout. A decision node that draws no
    terminals evaluates to -inf.
    """
    rng = random.Random(seed)
    tree = Tree()
    for i in range(BIG_EXAMPLE_DECISIONS):
        tree.insert(ROOT_ID, DecisionNode(label=f"Decision {i}", value=10))
    for i in range(BIG_EXAMPLE_OUTCOMES):
        parent_id = rng.randint(1, BIG_EXAMPLE_DECISIONS)
        tree.insert(parent_id, TerminalNode(label=f"Rand {i}", value=parent_id * 20))
    return tree


__all__ = ["big_example_tree", "example_tree"]
