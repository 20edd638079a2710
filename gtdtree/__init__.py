"""
gtdtree - Immutable task hierarchies with a packed node-map layout.

A small Python package for editing a forest of tasks (titled nodes with
ordered children) and sizing it for display as nested tables or as a
zoomable map of circles.

Features:
- Immutable, structure-sharing edits at any depth
- Silent no-op when an edit target does not exist
- Id-path lookups and task table rows
- Bottom-up layout sizing for the node map
- Editing session with selection fallbacks
- Hooks for observability
- Structured logging

Example usage:
    >>> from gtdtree import TreeSession, TreeRenderer
    >>>
    >>> session = TreeSession()
    >>> project = session.add_root("Move house")
    >>> packing = session.add_child(project.id, "Pack")
    >>> session.add_child(packing.id, "Kitchen")
    >>> session.insert_sibling_after(None, project.id, "Taxes")
    >>>
    >>> print(TreeRenderer().render_table(session.tree))
    >>> session.layout(project.id)
    LayoutResult(size=..., child_max_size=..., columns=1)
"""

# Core classes
from .config import GtdTreeConfig
from .core import DEFAULT_TITLE, TaskNode, TaskTree, create_node
from .ids import new_id
from .builder import ForestBuilder
from .session import TreeSession
from .renderer import TreeRenderer

# Queries
from .queries import (
    LeafPath,
    depth_of,
    enumerate_leaf_paths,
    find_at,
    find_node,
    find_path,
    iter_chains,
)

# Mutations
from .mutations import (
    append_child,
    append_child_at,
    append_root,
    insert_sibling_after,
    rename_node,
)

# Layout
from .layout import (
    ChildPlacement,
    LayoutConfig,
    LayoutResult,
    base_size,
    compute_forest_layout,
    compute_layout,
    grid_shape,
    place_children,
)

# Hooks and events
from .hooks import HookDispatcher, TreeHooks, create_logging_hooks

# Logging
from .logging_integration import (
    GtdTreeLogger,
    StructuredFormatter,
    configure_gtdtree_logging,
)

# Execution counter
from .timing import ExecutionCounter, format_clock

__all__ = [
    # Core
    "GtdTreeConfig",
    "DEFAULT_TITLE",
    "TaskNode",
    "TaskTree",
    "create_node",
    "new_id",
    "ForestBuilder",
    "TreeSession",
    "TreeRenderer",
    # Queries
    "LeafPath",
    "depth_of",
    "enumerate_leaf_paths",
    "find_at",
    "find_node",
    "find_path",
    "iter_chains",
    # Mutations
    "append_child",
    "append_child_at",
    "append_root",
    "insert_sibling_after",
    "rename_node",
    # Layout
    "ChildPlacement",
    "LayoutConfig",
    "LayoutResult",
    "base_size",
    "compute_forest_layout",
    "compute_layout",
    "grid_shape",
    "place_children",
    # Hooks
    "HookDispatcher",
    "TreeHooks",
    "create_logging_hooks",
    # Logging
    "GtdTreeLogger",
    "StructuredFormatter",
    "configure_gtdtree_logging",
    # Execution counter
    "ExecutionCounter",
    "format_clock",
]

__version__ = "0.1.0"
