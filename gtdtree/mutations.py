"""Pure, structure-sharing mutations of a task forest.

Every function takes a TaskTree and returns a TaskTree. Only the nodes on
the path from a root to the changed node are rebuilt; every other subtree
is the same object as before. When the target address does not resolve,
the input tree itself is returned.

A preset node passed in must not reuse an id already in the forest; that
raises ValueError before anything is inserted.
"""

from dataclasses import replace
from typing import Callable, Optional, Sequence

from .core import DEFAULT_TITLE, TaskNode, TaskTree, create_node

NodeUpdate = Callable[[TaskNode], TaskNode]


def _replace_at(nodes: tuple[TaskNode, ...], index: int, node: TaskNode) -> tuple[TaskNode, ...]:
    return nodes[:index] + (node,) + nodes[index + 1:]


def _update_node(
    nodes: tuple[TaskNode, ...], node_id: str, update: NodeUpdate
) -> tuple[TaskNode, ...]:
    """Apply ``update`` to the first node matching ``node_id``, depth-first.

    Returns ``nodes`` itself when nothing matched.
    """
    for index, node in enumerate(nodes):
        if node.id == node_id:
            return _replace_at(nodes, index, update(node))
        children = _update_node(node.children, node_id, update)
        if children is not node.children:
            return _replace_at(nodes, index, replace(node, children=children))
    return nodes


def _update_path(
    nodes: tuple[TaskNode, ...], path: Sequence[str], update: NodeUpdate
) -> tuple[TaskNode, ...]:
    """Apply ``update`` to the node addressed by an explicit id path."""
    if not path:
        return nodes
    head, rest = path[0], path[1:]
    for index, node in enumerate(nodes):
        if node.id != head:
            continue
        if not rest:
            return _replace_at(nodes, index, update(node))
        children = _update_path(node.children, rest, update)
        if children is node.children:
            return nodes
        return _replace_at(nodes, index, replace(node, children=children))
    return nodes


def _with_roots(tree: TaskTree, roots: tuple[TaskNode, ...]) -> TaskTree:
    if roots is tree.roots:
        return tree
    return TaskTree(roots)


def _insert_after(
    nodes: tuple[TaskNode, ...], anchor_id: str, node: TaskNode
) -> tuple[TaskNode, ...]:
    for index, sibling in enumerate(nodes):
        if sibling.id == anchor_id:
            return nodes[:index + 1] + (node,) + nodes[index + 1:]
    return nodes


def _require_new_ids(tree: TaskTree, node: TaskNode) -> TaskNode:
    """Return ``node`` if none of its subtree ids is already in ``tree``.

    Raises:
        ValueError: If an id in the subtree clashes with the forest or
            repeats inside the subtree.
    """
    seen = set()
    for descendant in node.walk():
        if descendant.id in seen or tree.find(descendant.id) is not None:
            raise ValueError(f"Node ID {descendant.id!r} already exists in the forest")
        seen.add(descendant.id)
    return node


def append_root(tree: TaskTree, node: TaskNode) -> TaskTree:
    """Append a node to the end of the root sequence."""
    return TaskTree(tree.roots + (_require_new_ids(tree, node),))


def append_child(
    tree: TaskTree,
    parent_id: str,
    title: str = DEFAULT_TITLE,
    node: Optional[TaskNode] = None,
) -> TaskTree:
    """Append a new child to the node with ``parent_id``, at any depth.

    Args:
        tree: The current forest.
        parent_id: ID of the parent node.
        title: Title for the new node.
        node: Preset node to append instead of creating one.

    Returns:
        The new forest, or ``tree`` unchanged if the parent is absent.

    Raises:
        ValueError: If ``node`` reuses an id already in the forest.
    """
    child = _require_new_ids(tree, node) if node is not None else create_node(title)
    return _with_roots(
        tree,
        _update_node(
            tree.roots, parent_id, lambda parent: replace(parent, children=parent.children + (child,))
        ),
    )


def append_child_at(
    tree: TaskTree,
    path: Sequence[str],
    title: str = DEFAULT_TITLE,
    node: Optional[TaskNode] = None,
) -> TaskTree:
    """Append a new child under the node addressed by an id path.

    Args:
        tree: The current forest.
        path: Root id, then child id, and so on down to the parent.
        title: Title for the new node.
        node: Preset node to append instead of creating one.

    Returns:
        The new forest, or ``tree`` unchanged if the path does not resolve.

    Raises:
        ValueError: If ``node`` reuses an id already in the forest.
    """
    child = _require_new_ids(tree, node) if node is not None else create_node(title)
    return _with_roots(
        tree,
        _update_path(
            tree.roots, tuple(path), lambda parent: replace(parent, children=parent.children + (child,))
        ),
    )


def insert_sibling_after(
    tree: TaskTree,
    parent_id: Optional[str],
    anchor_id: str,
    title: str = DEFAULT_TITLE,
    node: Optional[TaskNode] = None,
) -> TaskTree:
    """Insert a new node immediately after ``anchor_id``.

    Args:
        tree: The current forest.
        parent_id: ID of the node whose children hold the anchor, or None
            for the root sequence.
        anchor_id: ID of the sibling to insert after.
        title: Title for the new node.
        node: Preset node to insert instead of creating one.

    Returns:
        The new forest, or ``tree`` unchanged if the anchor is not among
        the addressed children.

    Raises:
        ValueError: If ``node`` reuses an id already in the forest.
    """
    sibling = _require_new_ids(tree, node) if node is not None else create_node(title)
    if parent_id is None:
        return _with_roots(tree, _insert_after(tree.roots, anchor_id, sibling))

    parent = tree.find(parent_id)
    if parent is None or parent.index_of(anchor_id) is None:
        return tree
    return _with_roots(
        tree,
        _update_node(
            tree.roots,
            parent_id,
            lambda found: replace(found, children=_insert_after(found.children, anchor_id, sibling)),
        ),
    )


def rename_node(tree: TaskTree, node_id: str, title: str) -> TaskTree:
    """Replace the title of the node with ``node_id``, at any depth."""
    return _with_roots(tree, _update_node(tree.roots, node_id, lambda node: replace(node, title=title)))
