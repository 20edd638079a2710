"""Text rendering of task forests."""

from typing import Optional

from .config import GtdTreeConfig
from .core import TaskNode, TaskTree
from .layout import compute_forest_layout
from .queries import enumerate_leaf_paths


class TreeRenderer:
    """Renders task forests to formatted strings.

    Example:
        >>> renderer = TreeRenderer(GtdTreeConfig())
        >>> print(renderer.render(tree))
        Move house
        ├── Book van
        └── Pack
            ├── Kitchen
            └── Books
    """

    def __init__(self, config: Optional[GtdTreeConfig] = None):
        """Initialize the renderer.

        Args:
            config: Configuration for labels and tree characters.
        """
        self.config = config or GtdTreeConfig()

    def format_title(self, node: Optional[TaskNode]) -> str:
        """Get the display title for a node.

        Empty titles show as the unnamed label, a missing node as the
        empty cell marker.
        """
        if node is None:
            return self.config.empty_cell
        return node.title or self.config.unnamed_label

    def render(self, tree: TaskTree, max_depth: Optional[int] = None) -> str:
        """Render the forest as a text tree.

        Args:
            tree: The forest to render.
            max_depth: Maximum depth to render. Defaults to config.default_max_depth.

        Returns:
            Formatted tree string. Empty for an empty forest.
        """
        if max_depth is None:
            max_depth = self.config.default_max_depth

        lines: list[str] = []
        for root in tree.roots:
            self._render_node(root, lines, "", True, 0, max_depth)
        return "\n".join(lines)

    def _render_node(
        self,
        node: TaskNode,
        lines: list[str],
        prefix: str,
        is_last: bool,
        depth: int,
        max_depth: Optional[int],
    ) -> None:
        """Recursively render a node and its children.

        Args:
            node: The node to render.
            lines: List to append lines to.
            prefix: Current line prefix for tree structure.
            is_last: Whether this is the last child of its parent.
            depth: Current depth in the tree.
            max_depth: Maximum depth to render.
        """
        chars = self.config.tree_chars
        title = self.format_title(node)

        if depth == 0:
            lines.append(title)
            child_prefix = ""
        else:
            branch = chars["last_branch"] if is_last else chars["branch"]
            lines.append(f"{prefix}{branch}{title}")
            child_prefix = prefix + (chars["empty"] if is_last else chars["vertical"])

        if not node.children:
            return

        if max_depth is None or depth < max_depth:
            for i, child in enumerate(node.children):
                self._render_node(
                    child, lines, child_prefix, i == len(node.children) - 1, depth + 1, max_depth
                )
        else:
            lines.append(f"{child_prefix}{chars['last_branch']}... ({len(node.children)} items)")

    def render_table(self, tree: TaskTree) -> str:
        """Render the task table, one row per terminal node.

        Returns:
            Column-aligned table with a header row, or an empty string for an
            empty forest.
        """
        rows = [
            tuple(self.format_title(node) for node in path)
            for path in enumerate_leaf_paths(tree)
        ]
        if not rows:
            return ""

        table = [tuple(self.config.column_headers)] + rows
        widths = [max(len(row[i]) for row in table) for i in range(3)]
        lines = []
        for row in table:
            lines.append("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
        lines.insert(1, "  ".join("-" * width for width in widths))
        return "\n".join(lines)

    def render_map(self, tree: TaskTree) -> str:
        """Render an outline of the node map with computed sizes.

        Each line shows a node's title, diameter and child grid columns.
        """
        layouts = compute_forest_layout(tree, self.config.layout)
        lines = []
        for node, depth in tree.walk_with_depth():
            result = layouts[node.id]
            grid = f" cols={result.columns}" if result.columns else ""
            lines.append(f"{'  ' * depth}{self.format_title(node)} (size={result.size}{grid})")
        return "\n".join(lines)
