from .bstree import Direction, DuplicatePolicy, Node, OrderedTree
from .exceptions import DuplicateKeyError, EmptyTreeError, KeyNotFoundError, TreeError

__all__ = [
    "Direction",
    "DuplicateKeyError",
    "DuplicatePolicy",
    "EmptyTreeError",
    "KeyNotFoundError",
    "Node",
    "OrderedTree",
    "TreeError",
]
