"""Per-mode cursors and their reconciliation against the buffer."""

from __future__ import annotations

from dataclasses import dataclass, field

from vimlet._buffer import TextBuffer
from vimlet.modes import EditorMode


@dataclass
class Cursor:
    """A (column, row) position. Columns index characters, not cells."""

    col: int = 0
    row: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.col, self.row)

    def move_to(self, col: int, row: int) -> None:
        self.col = col
        self.row = row


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


@dataclass
class CursorSet:
    normal: Cursor = field(default_factory=Cursor)
    command: Cursor = field(default_factory=lambda: Cursor(1, 0))
    insert: Cursor = field(default_factory=Cursor)

    def for_mode(self, mode: EditorMode) -> Cursor:
        if mode == EditorMode.INSERT:
            return self.insert
        if mode == EditorMode.COMMAND:
            return self.command
        return self.normal

    def reconcile(
        self,
        buffer: TextBuffer,
        source: EditorMode,
        target: EditorMode,
        *,
        append: bool = False,
        command_text: str = "",
    ) -> None:
        """Derive *target*'s cursor from *source*'s and clamp it into the buffer.

        Called after every action. When *source* equals *target* this only
        re-clamps the active cursor and copies it onto its twin: Normal and
        Insert share one position while either is active.
        """
        if target == EditorMode.COMMAND:
            self.command.col = _clamp(self.command.col, 0, len(command_text))
            if source != EditorMode.COMMAND:
                self.command.col = len(command_text)
            return

        if source == EditorMode.COMMAND:
            self.command.col = 1
            source = EditorMode.NORMAL

        if target == EditorMode.INSERT:
            anchor = self.normal if source == EditorMode.NORMAL else self.insert
            row = _clamp(anchor.row, 0, buffer.last_row())
            line_len = buffer.line_length(row)
            col = anchor.col
            if source == EditorMode.NORMAL and append:
                # Append after the character under the cursor; on the last
                # column (or an empty line) that is the end of the line.
                col = col + 1 if col < line_len - 1 else line_len
            self.insert.move_to(_clamp(col, 0, line_len), row)
            self.normal.move_to(self.insert.col, self.insert.row)
            return

        if source == EditorMode.INSERT:
            col, row = self.insert.col - 1, self.insert.row
        else:
            col, row = self.normal.col, self.normal.row
        row = _clamp(row, 0, buffer.last_row())
        self.normal.move_to(_clamp(col, 0, buffer.line_length(row)), row)
        self.insert.move_to(self.normal.col, self.normal.row)
