"""Holder of the current forest value for an editing session."""

from typing import Callable, Iterator, Optional, Sequence

from .config import GtdTreeConfig
from .core import TaskNode, TaskTree, create_node
from .hooks import HookDispatcher
from .layout import LayoutResult, compute_layout
from .logging_integration import GtdTreeLogger
from . import mutations, queries


class TreeSession:
    """Single owner of the current TaskTree.

    Every edit runs a pure mutation and swaps the result in as the new
    current tree. Observers holding an older tree value keep a valid,
    unchanged forest.

    Example:
        >>> session = TreeSession()
        >>> project = session.add_root("Move house")
        >>> task = session.add_child(project.id, "Book van")
        >>> for row in session.leaf_paths():
        ...     print(row.root.title, row.middle.title)
        Move house Book van
    """

    def __init__(
        self,
        tree: Optional[TaskTree] = None,
        config: Optional[GtdTreeConfig] = None,
        hooks: Optional[HookDispatcher] = None,
        on_update: Optional[Callable[[TaskTree], None]] = None,
    ):
        """Initialize the session.

        Args:
            tree: Starting forest. Defaults to an empty forest.
            config: Configuration settings.
            hooks: HookDispatcher for editing events.
            on_update: Callback with the new forest after every applied edit.
        """
        self.config = config or GtdTreeConfig()
        self.hooks = hooks or HookDispatcher()
        self._tree = tree if tree is not None else TaskTree()
        self._selected_root_id: Optional[str] = None

        if on_update:
            self.hooks.on("on_tree_replaced", on_update)
        if self.config.enable_logging:
            self.hooks.register(
                GtdTreeLogger(logger_name=self.config.logger_name, level=self.config.log_level)
            )

    @property
    def tree(self) -> TaskTree:
        """The current forest."""
        return self._tree

    def _commit(self, operation: str, new_tree: TaskTree, address: Sequence[Optional[str]]) -> bool:
        if new_tree is self._tree:
            self.hooks.emit("on_address_missing", operation, tuple(address))
            return False
        self._tree = new_tree
        self.hooks.emit("on_tree_replaced", new_tree)
        return True

    def _title_under(self, parent_id: Optional[str], title: Optional[str]) -> str:
        if title is not None:
            return title
        if parent_id is None:
            return self.config.title_for_depth(0)
        depth = queries.depth_of(self._tree, parent_id)
        if depth is None:
            return self.config.default_title
        return self.config.title_for_depth(depth + 1)

    # Edits

    def add_root(self, title: Optional[str] = None) -> TaskNode:
        """Append a new root and select it.

        Returns:
            The created node.
        """
        node = create_node(self._title_under(None, title))
        self._commit("append_root", mutations.append_root(self._tree, node), ())
        self.hooks.emit("on_root_appended", self._tree, node)
        self.select_root(node.id)
        return node

    def add_child(self, parent_id: str, title: Optional[str] = None) -> Optional[TaskNode]:
        """Append a new child under ``parent_id`` at any depth.

        Returns:
            The created node, or None if the parent does not exist.
        """
        node = create_node(self._title_under(parent_id, title))
        new_tree = mutations.append_child(self._tree, parent_id, node=node)
        if not self._commit("append_child", new_tree, (parent_id,)):
            return None
        self.hooks.emit("on_child_appended", new_tree, new_tree.find(parent_id), node)
        return node

    def add_child_at(self, path: Sequence[str], title: Optional[str] = None) -> Optional[TaskNode]:
        """Append a new child under the node addressed by an id path.

        Returns:
            The created node, or None if the path does not resolve.
        """
        path = tuple(path)
        if title is None:
            title = self.config.title_for_depth(len(path))
        node = create_node(title)
        new_tree = mutations.append_child_at(self._tree, path, node=node)
        if not self._commit("append_child_at", new_tree, path):
            return None
        self.hooks.emit("on_child_appended", new_tree, queries.find_at(new_tree, *path), node)
        return node

    def insert_sibling_after(
        self,
        parent_id: Optional[str],
        anchor_id: str,
        title: Optional[str] = None,
    ) -> Optional[TaskNode]:
        """Insert a new node right after ``anchor_id`` among its siblings.

        Args:
            parent_id: Parent of the anchor, or None when the anchor is a root.
            anchor_id: The sibling to insert after.
            title: Title for the new node. Defaults to the depth's placeholder.

        Returns:
            The created node, or None if the anchor is not found there.
        """
        node = create_node(self._title_under(parent_id, title))
        new_tree = mutations.insert_sibling_after(self._tree, parent_id, anchor_id, node=node)
        if not self._commit("insert_sibling_after", new_tree, (parent_id, anchor_id)):
            return None
        self.hooks.emit("on_sibling_inserted", new_tree, new_tree.find(anchor_id), node)
        return node

    def rename(self, node_id: str, title: str) -> Optional[TaskNode]:
        """Change a node's title.

        Returns:
            The renamed node as it appears in the new forest, or None if absent.
        """
        old = self._tree.find(node_id)
        new_tree = mutations.rename_node(self._tree, node_id, title)
        if not self._commit("rename_node", new_tree, (node_id,)):
            return None
        renamed = new_tree.find(node_id)
        self.hooks.emit("on_node_renamed", new_tree, renamed, old.title)
        return renamed

    # Selection

    def select_root(self, node_id: Optional[str]) -> Optional[TaskNode]:
        """Select a root for the top-level screen.

        Returns:
            The root that is now effectively selected.
        """
        self._selected_root_id = node_id
        selected = self.selected_root
        self.hooks.emit("on_selection_changed", selected)
        return selected

    @property
    def selected_root(self) -> Optional[TaskNode]:
        """The selected root, falling back to the first root.

        None only when the forest is empty.
        """
        if self._selected_root_id is not None:
            node = queries.find_at(self._tree, self._selected_root_id)
            if node is not None:
                return node
        if self._tree.roots:
            return self._tree.roots[0]
        return None

    def resolve_branch(
        self, root_id: str, middle_id: Optional[str]
    ) -> Optional[tuple[TaskNode, Optional[TaskNode]]]:
        """Resolve a (root, middle) screen address with fallbacks.

        A missing middle node falls back to the root's first child, and to
        ``(root, None)`` when the root has no children.

        Returns:
            The pair to show, or None if the root itself is gone.
        """
        root = queries.find_at(self._tree, root_id)
        if root is None:
            return None
        if middle_id is not None:
            middle = queries.find_at(self._tree, root_id, middle_id)
            if middle is not None:
                return root, middle
        if root.children:
            return root, root.children[0]
        return root, None

    # Views

    def leaf_paths(self) -> Iterator[queries.LeafPath]:
        """Rows of the task table for the current forest."""
        return queries.enumerate_leaf_paths(self._tree)

    def layout(self, node_id: str) -> Optional[LayoutResult]:
        """Layout of the subtree at ``node_id``, or None if absent."""
        depth = queries.depth_of(self._tree, node_id)
        if depth is None:
            return None
        return compute_layout(self._tree.find(node_id), depth, self.config.layout)

    def __repr__(self) -> str:
        return f"TreeSession(tree={self._tree!r})"
