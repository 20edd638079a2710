"""Fluent builder API for constructing task forests."""

from dataclasses import dataclass, field
from typing import Optional

from .core import DEFAULT_TITLE, TaskNode, TaskTree
from .ids import new_id


@dataclass
class _Draft:
    """Mutable stand-in for a node until build() freezes the forest."""

    id: str
    title: str
    children: list["_Draft"] = field(default_factory=list)

    def freeze(self) -> TaskNode:
        return TaskNode(
            id=self.id,
            title=self.title,
            children=tuple(child.freeze() for child in self.children),
        )


class ForestBuilder:
    """Fluent builder for constructing task forests.

    Example:
        >>> tree = (
        ...     ForestBuilder()
        ...     .add_root("Move house")
        ...         .add_child("Book van")
        ...         .add_node("Pack")
        ...             .add_child("Kitchen")
        ...             .add_child("Books")
        ...     .root()
        ...     .add_root("Taxes", node_id="taxes")
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._roots: list[_Draft] = []
        self._current: Optional[_Draft] = None
        self._stack: list[_Draft] = []
        self._ids: set[str] = set()

    def _draft(self, title: str, node_id: Optional[str]) -> _Draft:
        node_id = node_id or new_id()
        if node_id in self._ids:
            raise ValueError(f"Duplicate node id: {node_id!r}")
        self._ids.add(node_id)
        return _Draft(id=node_id, title=title)

    def add_root(self, title: str = DEFAULT_TITLE, node_id: Optional[str] = None) -> "ForestBuilder":
        """Add a root node and move into it.

        Args:
            title: Display title.
            node_id: Explicit ID. Generated when omitted.

        Returns:
            Self for method chaining.
        """
        draft = self._draft(title, node_id)
        self._roots.append(draft)
        self._stack.clear()
        self._current = draft
        return self

    def add_node(self, title: str = DEFAULT_TITLE, node_id: Optional[str] = None) -> "ForestBuilder":
        """Add a child node to the current node and move into it.

        Returns:
            Self for method chaining.
        """
        parent = self._require_current()
        draft = self._draft(title, node_id)
        parent.children.append(draft)
        self._stack.append(parent)
        self._current = draft
        return self

    def add_child(self, title: str = DEFAULT_TITLE, node_id: Optional[str] = None) -> "ForestBuilder":
        """Add a child node to the current node WITHOUT moving into it.

        Use this for leaf nodes or several siblings at the same level.

        Returns:
            Self for method chaining.
        """
        self._require_current().children.append(self._draft(title, node_id))
        return self

    def up(self) -> "ForestBuilder":
        """Move back up to the parent node.

        Returns:
            Self for method chaining.
        """
        if self._stack:
            self._current = self._stack.pop()
        return self

    def root(self) -> "ForestBuilder":
        """Move back to the current root node.

        Returns:
            Self for method chaining.
        """
        if self._stack:
            self._current = self._stack[0]
            self._stack.clear()
        return self

    def _require_current(self) -> _Draft:
        if self._current is None:
            raise ValueError("Call add_root() before adding children")
        return self._current

    def build(self) -> TaskTree:
        """Build and return the forest.

        Returns:
            The constructed TaskTree.
        """
        return TaskTree(tuple(draft.freeze() for draft in self._roots))

    @property
    def current_id(self) -> Optional[str]:
        """ID of the node new children are added to."""
        return self._current.id if self._current is not None else None
