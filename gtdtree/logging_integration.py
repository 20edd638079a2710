"""Structured logging integration for tree editing."""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .core import TaskNode, TaskTree


@dataclass
class GtdTreeLogger:
    """Structured logging adapter for tree editing.

    Implements the TreeHooks protocol for automatic logging of editing events.
    Uses Python's standard logging with structured extra data.

    Example:
        >>> import logging
        >>> logging.basicConfig(level=logging.INFO)
        >>>
        >>> logger = GtdTreeLogger(logger_name="planner", level="DEBUG")
        >>> session = TreeSession()
        >>> session.hooks.register(logger)
        >>>
        >>> # Logs will include structured data:
        >>> # INFO planner: Child appended parent_id=... child_id=... child_title=New sub-task
    """

    logger_name: str = "gtdtree"
    level: str = "INFO"
    _logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        """Initialize the logger."""
        self._logger = logging.getLogger(self.logger_name)
        self._logger.setLevel(getattr(logging, self.level.upper()))

    @property
    def logger(self) -> logging.Logger:
        """Get the underlying logger."""
        if self._logger is None:
            self._logger = logging.getLogger(self.logger_name)
        return self._logger

    def _format_extra(self, **kwargs: Any) -> dict[str, Any]:
        """Format extra data for structured logging."""
        return {k: v for k, v in kwargs.items() if v is not None}

    # TreeHooks protocol implementation

    def on_root_appended(self, tree: "TaskTree", node: "TaskNode") -> None:
        """Log a new root."""
        self.logger.info(
            "Root appended",
            extra=self._format_extra(
                node_id=node.id,
                node_title=node.title,
                root_count=len(tree.roots),
            ),
        )

    def on_child_appended(
        self, tree: "TaskTree", parent: "TaskNode", child: "TaskNode"
    ) -> None:
        """Log a new child."""
        self.logger.info(
            "Child appended",
            extra=self._format_extra(
                parent_id=parent.id,
                parent_title=parent.title,
                child_id=child.id,
                child_title=child.title,
                child_count=len(parent.children),
            ),
        )

    def on_sibling_inserted(
        self, tree: "TaskTree", anchor: "TaskNode", node: "TaskNode"
    ) -> None:
        """Log a sibling insertion."""
        self.logger.info(
            "Sibling inserted",
            extra=self._format_extra(
                anchor_id=anchor.id,
                node_id=node.id,
                node_title=node.title,
            ),
        )

    def on_node_renamed(self, tree: "TaskTree", node: "TaskNode", old_title: str) -> None:
        """Log a rename (debug level, fires on every keystroke)."""
        self.logger.debug(
            "Node renamed",
            extra=self._format_extra(
                node_id=node.id,
                old_title=old_title,
                new_title=node.title,
            ),
        )

    def on_address_missing(self, operation: str, address: Sequence[Optional[str]]) -> None:
        """Log a no-op mutation (debug level, not a failure)."""
        self.logger.debug(
            "Address not found",
            extra=self._format_extra(
                operation=operation,
                address=tuple(address),
            ),
        )

    def on_selection_changed(self, node: Optional["TaskNode"]) -> None:
        """Log a selection change (debug level)."""
        self.logger.debug(
            "Selection changed",
            extra=self._format_extra(
                node_id=node.id if node is not None else None,
                node_title=node.title if node is not None else None,
            ),
        )


class StructuredFormatter(logging.Formatter):
    """Log formatter that includes extra fields in a structured format.

    Example output:
        2024-01-15 10:30:45 INFO gtdtree: Child appended [parent_id=... child_title=Draft]

    Usage:
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(StructuredFormatter())
        >>> logging.getLogger("gtdtree").addHandler(handler)
    """

    # Attributes every LogRecord carries
    STANDARD_ATTRS = frozenset({
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'pathname', 'process', 'processName', 'relativeCreated',
        'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
        'taskName', 'message', 'asctime',
    })

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with extra fields.

        Tuple values, such as a node address, are shown as ``a/b/c``.
        """
        message = super().format(record)

        extra_fields = {
            k: v for k, v in record.__dict__.items()
            if k not in self.STANDARD_ATTRS and not k.startswith('_')
        }

        if extra_fields:
            extra_str = " ".join(
                f"{k}={self._format_value(v)}" for k, v in extra_fields.items()
            )
            message = f"{message} [{extra_str}]"

        return message

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, tuple):
            return "/".join(str(part) for part in value)
        return str(value)


def configure_gtdtree_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    structured: bool = True,
    logger_name: str = "gtdtree",
) -> logging.Logger:
    """Configure logging for tree editing.

    Pass ``GtdTreeConfig.logger_name`` as ``logger_name`` so the handler
    sits on the same logger a session's GtdTreeLogger writes to.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format_string: Optional custom format string.
        structured: Whether to include extra fields in output.
        logger_name: Logger to configure.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level.upper()))

    if format_string:
        formatter = logging.Formatter(format_string)
    elif structured:
        formatter = StructuredFormatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
