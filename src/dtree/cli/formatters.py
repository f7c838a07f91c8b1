"""Formatting helpers for CLI presentation."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree as RichTree

from dtree.core.types import NodeData, NodeType
from dtree.utils.error_formatting import format_distribution_error

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from dtree.core.tree import Tree

TYPE_STYLES = {
    NodeType.DECISION: "bold blue",
    NodeType.CHANCE: "bold magenta",
    NodeType.TERMINAL: "green",
}


def format_number(value: Optional[float]) -> str:
    """Format a payoff, probability or expected value for display."""
    if value is None:
        return "-"
    if math.isinf(value):
        return "-inf" if value < 0 else "inf"
    return f"{value:g}"


def format_node(data: NodeData) -> str:
    """Single-line rich markup for one node."""
    node_type = NodeType(data.type)
    style = TYPE_STYLES[node_type]
    label = escape(data.label) if data.label else "[dim]<blank>[/dim]"
    parts = [
        f"[{style}]{label}[/{style}]",
        f"[dim]#{data.id} {node_type.display_name}[/dim]",
        f"value={format_number(data.value)}",
    ]
    if data.probability is not None:
        parts.append(f"p={format_number(data.probability)}")
    if data.expected_value is not None:
        parts.append(f"EV={format_number(data.expected_value)}")
    if data.is_optimal_branch:
        parts.append("[green]✓ optimal[/green]")
    return "  ".join(parts)


def build_node_tree(data: NodeData, branch: Optional[RichTree] = None) -> RichTree:
    """Render a snapshot record as a rich tree."""
    node = RichTree(format_node(data)) if branch is None else branch.add(format_node(data))
    for child in data.children:
        build_node_tree(child, node)
    return node


def build_distribution_table(tree: "Tree") -> Table:
    """Table of the chance nodes whose distributions are rejected."""
    table = Table(title="Invalid chance nodes", show_header=True, header_style="bold red")
    table.add_column("Node", style="cyan")
    table.add_column("Problem")
    for node_id in tree.invalid_chance_ids():
        node = tree.find(node_id)
        if node is None:  # pragma: no cover - ids come from the same tree
            continue
        probabilities = [child.probability for child in node.children]
        message = format_distribution_error(node.label, node.id, probabilities)
        table.add_row(f"#{node.id}", escape(message))
    return table


__all__ = [
    "build_distribution_table",
    "build_node_tree",
    "format_node",
    "format_number",
]
