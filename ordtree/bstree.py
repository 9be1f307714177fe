import copy
import enum
import logging
import weakref
from typing import Any, Optional, Tuple

from .exceptions import DuplicateKeyError, EmptyTreeError, KeyNotFoundError

logger = logging.getLogger(__name__)

_EMPTY = object()


class Direction(enum.IntEnum):
    ROOT = -1
    LEFT = 0
    RIGHT = 1


class DuplicatePolicy(enum.Enum):
    """What insert() does with a key that is already in the tree"""
    OVERWRITE = "overwrite"
    REJECT = "reject"
    # equal keys are routed right and stored as separate nodes
    ALLOW = "allow"


class Node:

    def __init__(self, key, value):
        self._parent: Optional[weakref.ref] = None
        self.right: Optional[Node] = None
        self.left: Optional[Node] = None
        self.key = key
        self.value = value

    @property
    def parent(self) -> Optional["Node"]:
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, node: Optional["Node"]):
        # non-owning, the parent owns this node
        self._parent = weakref.ref(node) if node is not None else None

    def get_child(self, direction: Direction):
        if direction == Direction.LEFT:
            return self.left
        return self.right

    def set_child(self, direction: Direction, node: Optional["Node"]):
        if direction == Direction.LEFT:
            self.left = node
        else:
            self.right = node

    def get_direction(self) -> Direction:
        parent = self.parent
        if parent is None:
            return Direction.ROOT
        return Direction.LEFT if self is parent.left else Direction.RIGHT


class OrderedTree:
    """Key-value container backed by an unbalanced binary search tree.

    The tree may be created empty or holding a single entry:

        tree = OrderedTree()
        tree = OrderedTree(3, "three")

    Lookups and removals of missing keys raise KeyNotFoundError. No
    rebalancing is done, so operations are O(height) and degrade to O(n) on
    sorted input. All walks are iterative.
    """

    def __init__(self, key=_EMPTY, value=None, *,
                 duplicates: DuplicatePolicy = DuplicatePolicy.OVERWRITE):
        self.duplicates = DuplicatePolicy(duplicates)
        self.root: Optional[Node] = None
        self._size = 0
        if key is not _EMPTY:
            self.insert(key, value)

    def __len__(self):
        return self._size

    def __contains__(self, key):
        return self.search(key) is not None

    def __getitem__(self, key):
        return self.find(key)

    def __setitem__(self, key, value):
        self.insert(key, value)

    def __delitem__(self, key):
        self.remove(key)

    def __copy__(self):
        return self._clone(lambda obj: obj)

    def __deepcopy__(self, memo):
        return self._clone(lambda obj: copy.deepcopy(obj, memo), memo)

    def is_empty(self):
        return self.root is None

    def contains(self, key) -> bool:
        return key in self

    def insert(self, key, value=None):
        """Stores value under key.

        An existing key is handled according to the tree's duplicate policy:
        OVERWRITE replaces the stored value, REJECT raises DuplicateKeyError,
        and ALLOW adds a second node to the right of the first.
        """
        if self.root is None:
            self.root = Node(key, value)
            self._size = 1
            logger.debug("inserted %r as root", key)
            return

        parent = self.root
        while True:
            if key < parent.key:
                direction = Direction.LEFT
            elif key == parent.key and self.duplicates != DuplicatePolicy.ALLOW:
                if self.duplicates == DuplicatePolicy.REJECT:
                    raise DuplicateKeyError(key)
                parent.value = value
                return
            else:
                direction = Direction.RIGHT

            child = parent.get_child(direction)
            if child is None:
                break
            parent = child

        node = Node(key, value)
        node.parent = parent
        parent.set_child(direction, node)
        self._size += 1
        logger.debug("inserted %r as %s child of %r", key, direction.name, parent.key)

    def find(self, key):
        """Returns the value stored under key, raising KeyNotFoundError if absent"""
        node = self.search(key)
        if node is None:
            raise KeyNotFoundError(key)
        return node.value

    def get(self, key, default=None):
        node = self.search(key)
        if node is None:
            return default
        return node.value

    def remove(self, key):
        """Removes the entry for key, raising KeyNotFoundError if absent"""
        node = self.search(key)
        if node is None:
            raise KeyNotFoundError(key)

        # node has 2 children: pull the in-order successor's entry up into
        # this node and unlink the successor instead. the successor is the
        # leftmost node of the right subtree so it has no left child
        if node.left is not None and node.right is not None:
            successor = self._smallest(node.right)
            logger.debug("replacing %r with successor %r", node.key, successor.key)
            node.key = successor.key
            node.value = successor.value
            node = successor

        child = node.left if node.left is not None else node.right
        self._replace(node, child)
        self._size -= 1
        if self.root is None:
            logger.debug("removed %r, tree is now empty", key)
        else:
            logger.debug("removed %r", key)

    def minimum(self) -> Tuple[Any, Any]:
        if self.root is None:
            raise EmptyTreeError()
        node = self._smallest(self.root)
        return node.key, node.value

    def maximum(self) -> Tuple[Any, Any]:
        if self.root is None:
            raise EmptyTreeError()
        node = self.root
        while node.right is not None:
            node = node.right
        return node.key, node.value

    def clear(self):
        self.root = None
        self._size = 0

    def height(self, node: Optional[Node] = None) -> int:
        """Returns the number of edges on the longest path down from node

        Defaults to the root. An empty tree has height -1.
        """
        node = node or self.root
        if node is None:
            return -1
        height = 0
        stack = [(node, 0)]
        while stack:
            node, depth = stack.pop()
            height = max(height, depth)
            if node.left is not None:
                stack.append((node.left, depth + 1))
            if node.right is not None:
                stack.append((node.right, depth + 1))
        return height

    def search(self, key) -> Optional[Node]:
        """Returns the node holding key, or None if key is absent"""
        node = self.root
        while node is not None:
            if key == node.key:
                return node
            node = node.left if key < node.key else node.right
        return None

    def _smallest(self, node: Node) -> Node:
        """Returns the leftmost node of the subtree rooted at node"""
        while node.left is not None:
            node = node.left
        return node

    def _clone(self, copy_entry, memo=None) -> "OrderedTree":
        """Rebuilds the tree node by node so parent links point into the clone"""
        clone = OrderedTree(duplicates=self.duplicates)
        if memo is not None:
            memo[id(self)] = clone
        clone._size = self._size
        if self.root is None:
            return clone

        clone.root = Node(copy_entry(self.root.key), copy_entry(self.root.value))
        stack = [(self.root, clone.root)]
        while stack:
            source, target = stack.pop()
            for direction in (Direction.LEFT, Direction.RIGHT):
                child = source.get_child(direction)
                if child is None:
                    continue
                node = Node(copy_entry(child.key), copy_entry(child.value))
                node.parent = target
                target.set_child(direction, node)
                stack.append((child, node))
        return clone

    def _replace(self, node: Node, replacement: Optional[Node]):
        parent = node.parent
        if parent is None:
            self.root = replacement
        else:
            parent.set_child(node.get_direction(), replacement)

        if replacement is not None:
            replacement.parent = parent

        # fully detach the unlinked node
        node.parent = None
        node.left = None
        node.right = None
