"""Editor modes and dispatch outcomes."""

from __future__ import annotations

from enum import Enum, auto


class EditorMode(Enum):
    NORMAL = auto()
    COMMAND = auto()
    INSERT = auto()

    @property
    def label(self) -> str:
        """Status bar text for this mode."""
        return self.name

    @property
    def cursor_shape(self) -> str:
        return "bar" if self is EditorMode.INSERT else "block"


class Outcome(Enum):
    """Result of one dispatch step; the event loop stops on TERMINATE."""

    CONTINUE = auto()
    TERMINATE = auto()
