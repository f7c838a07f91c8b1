"""Fixed values shared by the tree core."""

ROOT_ID = 0
ROOT_LABEL = "root"

# Id carried by nodes that were never attached through Tree.insert.
UNASSIGNED_ID = -1

# Allowed deviation of a chance node's probability sum from 1.
PROBABILITY_TOLERANCE = 0.001

# Blank terminal branches attached to a freshly retyped node.
PLACEHOLDER_BRANCHES = 2

__all__ = [
    "PLACEHOLDER_BRANCHES",
    "PROBABILITY_TOLERANCE",
    "ROOT_ID",
    "ROOT_LABEL",
    "UNASSIGNED_ID",
]
