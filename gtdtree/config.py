"""Configuration for gtdtree."""

from dataclasses import dataclass, field
from typing import Optional

from .core import DEFAULT_TITLE
from .layout import LayoutConfig


@dataclass
class GtdTreeConfig:
    """Configuration for tree editing and display.

    Attributes:
        default_title: Title for new nodes deeper than ``level_titles`` covers.
        level_titles: Placeholder titles for new nodes, indexed by depth.
        unnamed_label: Label shown for nodes with an empty title.
        empty_cell: Text for table cells with no node.
        column_headers: Headers of the task table columns.
        default_max_depth: Depth to show in the text tree. None for unlimited.
        tree_chars: Box-drawing characters for the text tree.
        layout: Geometry constants for the node map.
        enable_logging: Whether a session registers the logging hooks.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        logger_name: Name for the logger.
    """

    # Titles
    default_title: str = DEFAULT_TITLE
    level_titles: tuple[str, ...] = (
        "New top-level task",
        "New mid-level task",
        "New sub-task",
    )

    # Display settings
    unnamed_label: str = "Untitled"
    empty_cell: str = "-"
    column_headers: tuple[str, str, str] = ("Top level", "Mid level", "Sub level")
    default_max_depth: Optional[int] = None

    # Tree characters
    tree_chars: dict[str, str] = field(
        default_factory=lambda: {
            "branch": "├── ",
            "last_branch": "└── ",
            "vertical": "│   ",
            "empty": "    ",
        }
    )

    # Node map geometry
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    # Logging settings
    enable_logging: bool = False
    log_level: str = "INFO"
    logger_name: str = "gtdtree"

    def title_for_depth(self, depth: int) -> str:
        """Get the placeholder title for a new node at ``depth``."""
        if 0 <= depth < len(self.level_titles):
            return self.level_titles[depth]
        return self.default_title

    def merge_with(self, other: "GtdTreeConfig") -> "GtdTreeConfig":
        """Create a new config by merging with another.

        Values from `other` take precedence where set.

        Args:
            other: Config to merge with.

        Returns:
            New merged config.
        """
        return GtdTreeConfig(
            default_title=other.default_title or self.default_title,
            level_titles=other.level_titles or self.level_titles,
            unnamed_label=other.unnamed_label or self.unnamed_label,
            empty_cell=other.empty_cell or self.empty_cell,
            column_headers=other.column_headers or self.column_headers,
            default_max_depth=other.default_max_depth if other.default_max_depth is not None else self.default_max_depth,
            tree_chars={**self.tree_chars, **other.tree_chars},
            layout=other.layout if other.layout != LayoutConfig() else self.layout,
            enable_logging=other.enable_logging or self.enable_logging,
            log_level=other.log_level or self.log_level,
            logger_name=other.logger_name or self.logger_name,
        )
