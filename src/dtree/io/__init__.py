from .errors import LoaderError
from .file_spec import NodeSpec, RootSpec, TreeFileSpec
from .yaml_loader import build_tree, load_tree, tree_from_mapping

__all__ = ["LoaderError", "NodeSpec", "RootSpec", "TreeFileSpec", "build_tree", "load_tree", "tree_from_mapping"]
