"""Hook system for tree editing events."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .core import TaskNode, TaskTree

logger = logging.getLogger(__name__)


class TreeHooks(Protocol):
    """Protocol defining all available tree editing hooks.

    Implement this protocol to receive editing events from a TreeSession.
    Methods are optional - only implement the ones you need.

    Example:
        >>> class MyHooks:
        ...     def on_node_renamed(self, tree, node, old_title):
        ...         print(f"{old_title!r} -> {node.title!r}")
        ...
        >>> hooks = HookDispatcher()
        >>> hooks.register(MyHooks())
    """

    def on_root_appended(self, tree: "TaskTree", node: "TaskNode") -> None:
        """Called after a new root node is added."""
        ...

    def on_child_appended(
        self, tree: "TaskTree", parent: "TaskNode", child: "TaskNode"
    ) -> None:
        """Called after a child is appended.

        Args:
            tree: The new forest.
            parent: The parent node as it appears in the new forest.
            child: The appended node.
        """
        ...

    def on_sibling_inserted(
        self, tree: "TaskTree", anchor: "TaskNode", node: "TaskNode"
    ) -> None:
        """Called after a node is inserted right after ``anchor``."""
        ...

    def on_node_renamed(self, tree: "TaskTree", node: "TaskNode", old_title: str) -> None:
        """Called after a node's title changes.

        Args:
            tree: The new forest.
            node: The renamed node as it appears in the new forest.
            old_title: The title before the change.
        """
        ...

    def on_address_missing(self, operation: str, address: Sequence[Optional[str]]) -> None:
        """Called when a mutation target did not resolve and nothing changed.

        Args:
            operation: Name of the mutation, e.g. "append_child".
            address: The ids that were looked up.
        """
        ...

    def on_selection_changed(self, node: Optional["TaskNode"]) -> None:
        """Called when the selected root changes."""
        ...

    def on_tree_replaced(self, tree: "TaskTree") -> None:
        """Called whenever the session swaps in a new forest value."""
        ...


# Type for individual hook callbacks
HookCallback = Callable[..., None]


@dataclass
class HookDispatcher:
    """Dispatches events to registered hook handlers.

    Supports both protocol implementations (register a class implementing
    TreeHooks) and individual callbacks (register a function for a specific event).

    Example:
        >>> hooks = HookDispatcher()
        >>>
        >>> # Register individual callbacks
        >>> hooks.on("on_tree_replaced", lambda tree: redraw(tree))
        >>>
        >>> # Or register a full protocol implementation
        >>> hooks.register(GtdTreeLogger())
        >>>
        >>> session = TreeSession(hooks=hooks)
    """

    _protocol_handlers: list[Any] = field(default_factory=list)
    _callbacks: dict[str, list[HookCallback]] = field(default_factory=dict)

    def register(self, handler: Any) -> "HookDispatcher":
        """Register a protocol handler.

        The handler should implement some or all methods from TreeHooks.

        Args:
            handler: Object implementing TreeHooks protocol methods.

        Returns:
            Self for chaining.
        """
        self._protocol_handlers.append(handler)
        return self

    def unregister(self, handler: Any) -> "HookDispatcher":
        """Unregister a protocol handler.

        Args:
            handler: Previously registered handler.

        Returns:
            Self for chaining.
        """
        if handler in self._protocol_handlers:
            self._protocol_handlers.remove(handler)
        return self

    def on(self, event: str, callback: HookCallback) -> "HookDispatcher":
        """Register a callback for a specific event.

        Args:
            event: Event name (e.g., "on_node_renamed").
            callback: Function to call when event occurs.

        Returns:
            Self for chaining.
        """
        self._callbacks.setdefault(event, []).append(callback)
        return self

    def off(self, event: str, callback: Optional[HookCallback] = None) -> "HookDispatcher":
        """Unregister callbacks for an event.

        Args:
            event: Event name.
            callback: Specific callback to remove, or None to remove all.

        Returns:
            Self for chaining.
        """
        if event not in self._callbacks:
            return self

        if callback is None:
            self._callbacks[event] = []
        elif callback in self._callbacks[event]:
            self._callbacks[event].remove(callback)

        return self

    def emit(self, event: str, *args: Any, **kwargs: Any) -> None:
        """Emit an event to all registered handlers.

        Errors in handlers are logged but don't stop other handlers.

        Args:
            event: Event name to emit.
            *args: Positional arguments to pass to handlers.
            **kwargs: Keyword arguments to pass to handlers.
        """
        for handler in self._protocol_handlers:
            method = getattr(handler, event, None)
            if method is not None and callable(method):
                try:
                    method(*args, **kwargs)
                except Exception:
                    logger.exception("Hook handler %r failed on %s", handler, event)

        for callback in self._callbacks.get(event, []):
            try:
                callback(*args, **kwargs)
            except Exception:
                logger.exception("Hook callback %r failed on %s", callback, event)

    def has_handlers(self, event: str) -> bool:
        """Check if any handlers are registered for an event."""
        if self._callbacks.get(event):
            return True

        for handler in self._protocol_handlers:
            if callable(getattr(handler, event, None)):
                return True

        return False

    def clear(self) -> "HookDispatcher":
        """Remove all registered handlers.

        Returns:
            Self for chaining.
        """
        self._protocol_handlers.clear()
        self._callbacks.clear()
        return self


def create_logging_hooks(logger: Any) -> "HookDispatcher":
    """Create a HookDispatcher that logs all events as plain messages.

    Convenience function for debugging.

    Args:
        logger: Logger instance with debug/info methods.

    Returns:
        Configured HookDispatcher.
    """
    hooks = HookDispatcher()

    hooks.on("on_root_appended", lambda tree, node: logger.info(f"Root added: {node.title} (id={node.id})"))
    hooks.on("on_child_appended", lambda tree, parent, child: logger.info(
        f"Child added: {child.title} under {parent.title}"
    ))
    hooks.on("on_sibling_inserted", lambda tree, anchor, node: logger.info(
        f"Sibling added: {node.title} after {anchor.title}"
    ))
    hooks.on("on_node_renamed", lambda tree, node, old_title: logger.info(
        f"Renamed: {old_title!r} -> {node.title!r}"
    ))
    hooks.on("on_address_missing", lambda operation, address: logger.debug(
        f"No-op {operation}: {list(address)} not found"
    ))

    return hooks
