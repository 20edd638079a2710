"""Identifier generation for task nodes."""

import uuid


def new_id() -> str:
    """Return a process-unique identifier suitable as a mapping key."""
    return str(uuid.uuid4())
