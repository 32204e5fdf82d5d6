"""Paragraph: the leaf editable region (one grapheme buffer plus a cursor)."""

from __future__ import annotations

from quire.buffer import GraphemeBuffer
from quire.commands import (
    Command,
    CursorEnterHorizontal,
    CursorEnterVertical,
    CursorLeave,
    Delete,
    Insert,
    Left,
    Motion,
    Right,
)
from quire.errors import MultilineInsertError
from quire.utils import MAX_COLUMN_WIDTH
from quire.view import ParagraphView, paragraph_view


class Paragraph:
    """A single line of graphemes with an optional cursor.

    ``cursor`` is ``None`` while the paragraph is not focused, otherwise an
    index in ``[0, len(self)]``.
    """

    def __init__(self, text: str = "", *, max_column_width: int = MAX_COLUMN_WIDTH) -> None:
        self.buffer = GraphemeBuffer(text)
        self.cursor: int | None = None
        self.max_column_width = max_column_width

    @classmethod
    def from_buffer(cls, buffer: GraphemeBuffer, *, max_column_width: int = MAX_COLUMN_WIDTH) -> Paragraph:
        paragraph = cls(max_column_width=max_column_width)
        paragraph.buffer = buffer
        return paragraph

    def __len__(self) -> int:
        return len(self.buffer)

    def __repr__(self) -> str:
        return f"Paragraph({str(self.buffer)!r}, cursor={self.cursor})"

    @property
    def text(self) -> str:
        return str(self.buffer)

    @property
    def focused(self) -> bool:
        return self.cursor is not None

    def cursor_column(self) -> int | None:
        """Normalized column of the cursor, or ``None`` when unfocused."""
        if self.cursor is None:
            return None
        return self.buffer.column_of(self.cursor, self.max_column_width)

    def command(self, cmd: Command) -> bool:
        match cmd:
            case Left():
                if self.cursor is None or self.cursor == 0:
                    return False
                self.cursor -= 1
                return True

            case Right():
                if self.cursor is None or self.cursor >= len(self.buffer):
                    return False
                self.cursor += 1
                return True

            case CursorLeave():
                if self.cursor is None:
                    return False
                self.cursor = None
                return True

            case CursorEnterHorizontal(from_right=from_right):
                self.cursor = len(self.buffer) if from_right else 0
                return True

            case CursorEnterVertical(column=column):
                self.cursor = self.buffer.index_of_column(column, self.max_column_width)
                return True

            case Insert():
                if self.cursor is None:
                    return False
                if cmd.has_line_break:
                    raise MultilineInsertError(cmd.text)
                result = self.buffer.insert(self.cursor, cmd.text)
                self.cursor = result.cursor
                return True

            case Delete(motion=Motion.LEFT):
                if self.cursor is None:
                    return False
                if self.buffer.remove_before(self.cursor):
                    self.cursor -= 1
                return True

            case Delete(motion=Motion.RIGHT):
                if self.cursor is None:
                    return False
                self.buffer.remove_at(self.cursor)
                return True

        return False

    def view(self) -> ParagraphView:
        return paragraph_view(self.buffer, self.cursor)
