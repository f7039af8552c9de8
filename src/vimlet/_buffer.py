"""Line buffer for the modal editor."""

from __future__ import annotations


class TextBuffer:
    """Ordered list of text lines. Never empty: a blank buffer is ``[""]``."""

    def __init__(self, content: str = "") -> None:
        self._lines: list[str] = content.split("\n") if content else [""]

    def __repr__(self) -> str:
        return f"TextBuffer({self._lines!r})"

    @property
    def lines(self) -> list[str]:
        return self._lines[:]

    def line_count(self) -> int:
        return len(self._lines)

    def last_row(self) -> int:
        return len(self._lines) - 1

    def line(self, row: int) -> str:
        return self._lines[row]

    def line_length(self, row: int) -> int:
        return len(self._lines[row])

    def get_content(self) -> str:
        return "\n".join(self._lines)

    # -- Mutation ----------------------------------------------------------

    def insert_char(self, row: int, col: int, ch: str) -> int:
        """Insert *ch* on *row* at *col*, clamped to the line end.

        Returns the index the character was inserted at.
        """
        line = self._lines[row]
        index = max(0, min(col, len(line)))
        self._lines[row] = line[:index] + ch + line[index:]
        return index

    def delete_before(self, row: int, col: int) -> bool:
        """Delete the character left of *col*. Returns False if nothing was removed."""
        line = self._lines[row]
        if not 0 < col <= len(line):
            return False
        self._lines[row] = line[: col - 1] + line[col:]
        return True

    def split_line(self, row: int, col: int) -> None:
        line = self._lines[row]
        col = max(0, min(col, len(line)))
        self._lines[row] = line[:col]
        self._lines.insert(row + 1, line[col:])

    def merge_with_previous(self, row: int) -> int:
        """Join line *row* onto the end of line ``row - 1``.

        Returns the previous line's length before the join, which is where
        the cursor belongs afterwards.
        """
        if row <= 0 or row >= len(self._lines):
            raise IndexError(f"cannot merge line {row} into the line above")
        prev_len = len(self._lines[row - 1])
        self._lines[row - 1] += self._lines.pop(row)
        return prev_len
