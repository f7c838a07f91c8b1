from __future__ import annotations
import logging
import os
from typing import Any, Dict, List, Mapping
import yaml
from pydantic import ValidationError
from dtree.core.constants import ROOT_ID
from dtree.core.tree import Tree
from dtree.core.types import NodeUpdate
from dtree.io.errors import LoaderError
from dtree.io.file_spec import NodeSpec, TreeFileSpec

logger = logging.getLogger(__name__)


def _read_yaml_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_tree(path: str) -> Tree:
    """Load a tree definition from a YAML file.

    Nodes are inserted depth-first in document order, so the first child of
    the root gets id 1.
    """
    if not os.path.isfile(path):
        raise LoaderError(path, "Tree definition not found")
    try:
        data = _read_yaml_file(path)
    except yaml.YAMLError as exc:
        raise LoaderError(path, "Malformed YAML", cause=exc) from exc
    except (UnicodeDecodeError, OSError) as exc:
        raise LoaderError(path, "Unreadable tree definition", cause=exc) from exc
    return tree_from_mapping(data, source=path)


def tree_from_mapping(data: Mapping[str, Any], source: str = "<memory>") -> Tree:
    """Validate an already parsed tree definition and build the tree."""
    if not isinstance(data, Mapping):
        raise LoaderError(source, "Tree definition must be a mapping")
    try:
        spec = TreeFileSpec.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(source, "Invalid tree definition", cause=exc) from exc
    tree = build_tree(spec)
    logger.info("Loaded tree with %d node(s) from %s", tree.next_id - 1, source)
    return tree


def build_tree(spec: TreeFileSpec) -> Tree:
    tree = Tree()
    tree.update(ROOT_ID, NodeUpdate(label=spec.tree.label, value=spec.tree.value))
    _insert_children(tree, ROOT_ID, spec.tree.children)
    return tree


def _insert_children(tree: Tree, parent_id: int, specs: List[NodeSpec]) -> None:
    for spec in specs:
        node = spec.build()
        tree.insert(parent_id, node)
        _insert_children(tree, node.id, spec.children)
