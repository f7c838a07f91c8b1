"""
Records exchanged between the tree core and its consumers.

- NodeType: variant tag of a node (decision / chance / terminal)
- NodeData: serializable snapshot of a subtree, the contract with renderers
- NodeUpdate: typed partial update merged into a node by Tree.update
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NodeType(str, Enum):
    """Variant tag of a tree node."""

    DECISION = "DEC"
    CHANCE = "RND"
    TERMINAL = "RES"

    @classmethod
    def parse(cls, raw: Any) -> NodeType:
        """
        Accept either the wire tag ("DEC") or a readable name ("decision").

        Raises:
            ValueError: If the value names no node type
        """
        if isinstance(raw, cls):
            return raw
        key = str(raw).strip()
        alias = _NODE_TYPE_ALIASES.get(key.lower())
        if alias is not None:
            return alias
        try:
            return cls(key.upper())
        except ValueError:
            valid = ", ".join(sorted(_NODE_TYPE_ALIASES))
            raise ValueError(f"Unknown node type '{raw}'. Expected one of: {valid}") from None

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_NODE_TYPE_ALIASES = {
    "decision": NodeType.DECISION,
    "dec": NodeType.DECISION,
    "chance": NodeType.CHANCE,
    "random": NodeType.CHANCE,
    "rnd": NodeType.CHANCE,
    "terminal": NodeType.TERMINAL,
    "result": NodeType.TERMINAL,
    "res": NodeType.TERMINAL,
}

_DISPLAY_NAMES = {
    NodeType.DECISION: "decision",
    NodeType.CHANCE: "chance",
    NodeType.TERMINAL: "terminal",
}


class NodeData(BaseModel):
    """
    Plain snapshot of a node and its subtree.

    ``expected_value`` is only filled in by optimal snapshots, and
    ``is_optimal_branch`` only on the children of decision nodes there.
    """

    id: int
    label: str
    value: float
    type: NodeType
    is_child_of_chance: bool = False
    probability: Optional[float] = None
    children: List[NodeData] = Field(default_factory=list)
    expected_value: Optional[float] = None
    is_optimal_branch: Optional[bool] = None

    # Childless decision nodes evaluate to -inf; keep it in JSON output.
    model_config = ConfigDict(ser_json_inf_nan="constants")

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator[NodeData]:
        """Yield this record and every descendant in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, node_id: int) -> Optional[NodeData]:
        """Get the record with the given id, if it is in this subtree."""
        return next((data for data in self.walk() if data.id == node_id), None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dict, leaving out absent optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


class NodeUpdate(BaseModel):
    """
    Partial set of node fields to overwrite.

    Only fields passed explicitly are merged; ``probability`` may be set to
    ``None`` to clear it. Identity and structure (id, type, children) are not
    updatable.
    """

    label: str = ""
    value: float = 0.0
    probability: Optional[float] = None

    model_config = ConfigDict(extra="forbid")

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly provided by the caller, with their new values."""
        return {name: getattr(self, name) for name in sorted(self.model_fields_set)}


__all__ = [
    "NodeData",
    "NodeType",
    "NodeUpdate",
]
