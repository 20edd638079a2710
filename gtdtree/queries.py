"""Read-only lookups over a task forest."""

from typing import Iterator, NamedTuple, Optional, Sequence

from .core import TaskNode, TaskTree


class LeafPath(NamedTuple):
    """One row of the task table: a root and the chain below it.

    ``middle`` and ``leaf`` are None when the chain stops early.
    """

    root: TaskNode
    middle: Optional[TaskNode] = None
    leaf: Optional[TaskNode] = None

    @property
    def task(self) -> TaskNode:
        """The most specific node in this row."""
        return self.leaf or self.middle or self.root


def _find_in(nodes: Sequence[TaskNode], node_id: str) -> Optional[TaskNode]:
    for node in nodes:
        if node.id == node_id:
            return node
    return None


def find_at(tree: TaskTree, *path: str) -> Optional[TaskNode]:
    """Resolve a node from an explicit id path.

    The first id names a root, each following id names a child of the
    previous node.

    Args:
        tree: The forest to search.
        *path: Root id, then child id, then grandchild id, and so on.

    Returns:
        The addressed node, or None if any segment does not resolve.
    """
    if not path:
        return None
    nodes: Sequence[TaskNode] = tree.roots
    node = None
    for node_id in path:
        node = _find_in(nodes, node_id)
        if node is None:
            return None
        nodes = node.children
    return node


def find_node(tree: TaskTree, node_id: str) -> Optional[TaskNode]:
    """Find a node at any depth."""
    return tree.find(node_id)


def find_path(tree: TaskTree, node_id: str) -> Optional[tuple[str, ...]]:
    """Get the id path from a root down to the given node.

    Returns:
        The path including ``node_id`` itself, or None if it is not in the forest.
    """
    def search(nodes: Sequence[TaskNode], trail: tuple[str, ...]) -> Optional[tuple[str, ...]]:
        for node in nodes:
            here = trail + (node.id,)
            if node.id == node_id:
                return here
            found = search(node.children, here)
            if found is not None:
                return found
        return None

    return search(tree.roots, ())


def depth_of(tree: TaskTree, node_id: str) -> Optional[int]:
    """Get a node's depth (roots are 0), or None if absent."""
    path = find_path(tree, node_id)
    if path is None:
        return None
    return len(path) - 1


def iter_chains(tree: TaskTree) -> Iterator[tuple[TaskNode, ...]]:
    """Yield every maximal root-to-terminal chain, depth-first and left to right."""
    def walk(node: TaskNode, trail: tuple[TaskNode, ...]) -> Iterator[tuple[TaskNode, ...]]:
        here = trail + (node,)
        if node.is_leaf():
            yield here
            return
        for child in node.children:
            yield from walk(child, here)

    for root in tree.roots:
        yield from walk(root, ())


def enumerate_leaf_paths(tree: TaskTree) -> Iterator[LeafPath]:
    """Enumerate task table rows, one per terminal node.

    A root or middle node without children is its own terminal and appears
    once. In chains longer than three nodes, ``middle`` is the depth-1
    ancestor and ``leaf`` is the terminal node.

    Each call walks the given tree value afresh.
    """
    for chain in iter_chains(tree):
        if len(chain) == 1:
            yield LeafPath(chain[0])
        elif len(chain) == 2:
            yield LeafPath(chain[0], chain[1])
        else:
            yield LeafPath(chain[0], chain[1], chain[-1])
