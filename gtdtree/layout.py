"""Layout sizing for the zoomable node map.

Every node is drawn as a circle that contains a header and a grid of its
children. Sizes are computed bottom-up: a parent's diameter is the
diagonal of the padded rectangle around its header and child grid.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .core import TaskNode, TaskTree


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry constants for the node map.

    Attributes:
        base_sizes: Minimum diameter per depth, non-increasing. Depths past
            the end of the table use the last entry.
        gap: Space between adjacent child cells.
        header: Height reserved above the child grid for the title.
        padding: Margin added on every side of the content rectangle.
        min_width_ratio: Content is at least this share of the node's own
            base size wide.
    """

    base_sizes: tuple[int, ...] = (320, 200, 130, 90, 64)
    gap: int = 16
    header: int = 36
    padding: int = 20
    min_width_ratio: float = 0.6

    def __post_init__(self) -> None:
        if not self.base_sizes:
            raise ValueError("base_sizes must not be empty")
        for larger, smaller in zip(self.base_sizes, self.base_sizes[1:]):
            if smaller > larger:
                raise ValueError("base_sizes must be non-increasing")


@dataclass(frozen=True)
class LayoutResult:
    """Computed footprint of one subtree.

    Attributes:
        size: Diameter of the node's circle.
        child_max_size: Cell size used for the next depth's grid.
        columns: Number of grid columns for the children (0 for a leaf).
    """

    size: int
    child_max_size: int
    columns: int


@dataclass(frozen=True)
class ChildPlacement:
    """Where a child circle sits inside its parent.

    ``x`` and ``y`` are offsets of the child's centre from the parent's centre.
    """

    node_id: str
    x: float
    y: float
    size: int
    column: int
    row: int


_DEFAULT_CONFIG = LayoutConfig()


def base_size(depth: int, config: Optional[LayoutConfig] = None) -> int:
    """Get the minimum diameter for a node at ``depth``."""
    if depth < 0:
        raise ValueError(f"depth must be >= 0, got {depth}")
    sizes = (config or _DEFAULT_CONFIG).base_sizes
    return sizes[min(depth, len(sizes) - 1)]


def grid_shape(count: int) -> tuple[int, int]:
    """Get (columns, rows) of the near-square grid for ``count`` children."""
    if count <= 0:
        return 0, 0
    columns = max(1, math.ceil(math.sqrt(count)))
    rows = math.ceil(count / columns)
    return columns, rows


def _content_box(
    columns: int, rows: int, cell: int, depth: int, config: LayoutConfig
) -> tuple[float, float, float, float]:
    """Get (grid_w, grid_h, content_w, content_h) for a node with children."""
    grid_w = columns * cell + (columns - 1) * config.gap
    grid_h = rows * cell + (rows - 1) * config.gap
    content_w = max(grid_w, config.min_width_ratio * base_size(depth, config))
    content_h = grid_h + config.header
    return grid_w, grid_h, content_w, content_h


def _layout(
    node: TaskNode,
    depth: int,
    config: LayoutConfig,
    out: Optional[dict[str, LayoutResult]],
) -> LayoutResult:
    own_base = base_size(depth, config)
    next_base = base_size(depth + 1, config)

    if node.is_leaf():
        result = LayoutResult(size=own_base, child_max_size=next_base, columns=0)
    else:
        child_sizes = [_layout(child, depth + 1, config, out).size for child in node.children]
        columns, rows = grid_shape(len(child_sizes))
        cell = max(max(child_sizes), next_base)
        _, _, content_w, content_h = _content_box(columns, rows, cell, depth, config)
        width = content_w + 2 * config.padding
        height = content_h + 2 * config.padding
        size = max(math.ceil(math.hypot(width, height)), own_base)
        result = LayoutResult(size=size, child_max_size=cell, columns=columns)

    if out is not None:
        out[node.id] = result
    return result


def compute_layout(
    node: TaskNode, depth: int, config: Optional[LayoutConfig] = None
) -> LayoutResult:
    """Compute the footprint a subtree needs to render without overlap.

    Args:
        node: Root of the subtree.
        depth: Nesting depth of ``node`` (forest roots are 0).
        config: Geometry constants. Defaults to LayoutConfig().

    Returns:
        The node's diameter, its children's cell size and column count.
    """
    return _layout(node, depth, config or _DEFAULT_CONFIG, None)


def compute_forest_layout(
    tree: TaskTree, config: Optional[LayoutConfig] = None
) -> dict[str, LayoutResult]:
    """Compute the layout of every node in the forest in one pass.

    Returns:
        Mapping of node ID to its LayoutResult.
    """
    results: dict[str, LayoutResult] = {}
    for root in tree.roots:
        _layout(root, 0, config or _DEFAULT_CONFIG, results)
    return results


def place_children(
    node: TaskNode, depth: int, config: Optional[LayoutConfig] = None
) -> list[ChildPlacement]:
    """Position each child circle relative to the centre of ``node``.

    Children fill the grid row by row in their stored order. Each child is
    centred in its cell and the grid is centred horizontally under the header.

    Args:
        node: The parent node.
        depth: Nesting depth of ``node``.
        config: Geometry constants. Defaults to LayoutConfig().

    Returns:
        One placement per child, in child order. Empty for a leaf.
    """
    config = config or _DEFAULT_CONFIG
    if node.is_leaf():
        return []

    child_sizes = [_layout(child, depth + 1, config, None).size for child in node.children]
    columns, rows = grid_shape(len(child_sizes))
    cell = max(max(child_sizes), base_size(depth + 1, config))
    grid_w, _, content_w, content_h = _content_box(columns, rows, cell, depth, config)

    # Top-left of the padded rectangle, which is centred on the node
    left = -(content_w + 2 * config.padding) / 2
    top = -(content_h + 2 * config.padding) / 2
    grid_left = left + config.padding + (content_w - grid_w) / 2
    grid_top = top + config.padding + config.header

    placements = []
    for index, (child, size) in enumerate(zip(node.children, child_sizes)):
        row, column = divmod(index, columns)
        placements.append(
            ChildPlacement(
                node_id=child.id,
                x=grid_left + column * (cell + config.gap) + cell / 2,
                y=grid_top + row * (cell + config.gap) + cell / 2,
                size=size,
                column=column,
                row=row,
            )
        )
    return placements
