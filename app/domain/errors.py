"""Domain error types.

Argument errors are plain ValueError. Quality validation failures are
returned as data and never raised.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class IllegalStateError(Exception):
    """An operation was attempted from a state that does not permit it."""

    def __init__(self, message: str, current_state: Any = None):
        super().__init__(message)
        self.message = message
        self.current_state = current_state

    @property
    def current_state_name(self) -> str | None:
        if isinstance(self.current_state, Enum):
            return self.current_state.name
        return None if self.current_state is None else str(self.current_state)


def require(value: Any, name: str) -> Any:
    """Return value, or raise ValueError if it is None."""
    if value is None:
        raise ValueError(f"{name} must not be None")
    return value


class NotFoundError(Exception):
    """A referenced entity does not exist."""
