"""Core data structures for gtdtree."""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Iterator, Optional

from .ids import new_id


# Placeholder title for nodes created without one
DEFAULT_TITLE = "New task"


@dataclass(frozen=True)
class TaskNode:
    """A node in the task forest.

    Nodes are immutable values. Changing a node means building a new one
    with ``dataclasses.replace`` and rebuilding the path above it.

    Attributes:
        id: Unique identifier for this node.
        title: Display title. An empty string is a valid title.
        children: Ordered child nodes.
    """

    id: str
    title: str = DEFAULT_TITLE
    children: tuple["TaskNode", ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return len(self.children) == 0

    def find_child(self, child_id: str) -> Optional["TaskNode"]:
        """Find a direct child by ID.

        Args:
            child_id: The ID of the child to find.

        Returns:
            The child node or None.
        """
        for child in self.children:
            if child.id == child_id:
                return child
        return None

    def index_of(self, child_id: str) -> Optional[int]:
        """Get the position of a direct child, or None."""
        for index, child in enumerate(self.children):
            if child.id == child_id:
                return index
        return None

    def walk(self) -> Iterator["TaskNode"]:
        """Iterate over this node and all descendants."""
        yield self
        for child in self.children:
            yield from child.walk()

    def __repr__(self) -> str:
        return f"TaskNode(id={self.id!r}, title={self.title!r}, children={len(self.children)})"


def create_node(title: str = DEFAULT_TITLE) -> TaskNode:
    """Create a new childless node with a fresh identifier.

    Args:
        title: Display title. Defaults to DEFAULT_TITLE.

    Returns:
        The new node.
    """
    return TaskNode(id=new_id(), title=title)


@dataclass(frozen=True)
class TaskTree:
    """An ordered forest of task nodes.

    A tree value is never modified. The functions in ``gtdtree.mutations``
    return new trees that share every untouched subtree with the old one.

    Attributes:
        roots: Top-level nodes, in display order.
    """

    roots: tuple[TaskNode, ...] = field(default=())

    def __post_init__(self) -> None:
        if not isinstance(self.roots, tuple):
            object.__setattr__(self, "roots", tuple(self.roots))

    @cached_property
    def _node_index(self) -> dict[str, TaskNode]:
        return {node.id: node for node in self.walk()}

    def find(self, node_id: str) -> Optional[TaskNode]:
        """Find a node anywhere in the forest by its ID."""
        return self._node_index.get(node_id)

    def walk(self) -> Iterator[TaskNode]:
        """Iterate over all nodes in the forest, depth-first."""
        for root in self.roots:
            yield from root.walk()

    def walk_with_depth(self) -> Iterator[tuple[TaskNode, int]]:
        """Depth-first iteration yielding (node, depth) pairs."""
        stack = [(root, 0) for root in reversed(self.roots)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            stack.extend((child, depth + 1) for child in reversed(node.children))

    def get_stats(self) -> dict[str, int]:
        """Get node counts for the forest."""
        stats = {"roots": len(self.roots), "total": 0, "leaves": 0, "max_depth": -1}
        for node, depth in self.walk_with_depth():
            stats["total"] += 1
            if node.is_leaf():
                stats["leaves"] += 1
            stats["max_depth"] = max(stats["max_depth"], depth)
        return stats

    def __iter__(self) -> Iterator[TaskNode]:
        return iter(self.roots)

    def __len__(self) -> int:
        return len(self.roots)

    def __repr__(self) -> str:
        stats = self.get_stats()
        return f"TaskTree(roots={stats['roots']}, nodes={stats['total']})"
