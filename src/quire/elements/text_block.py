"""Text block element: consecutive lines of free text.

Multi-line insertion and line joining happen here; a single
:class:`Paragraph` only ever edits its own line.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from quire.buffer import GraphemeBuffer
from quire.commands import (
    LEAVE,
    Command,
    CursorEnterHorizontal,
    CursorEnterVertical,
    CursorLeave,
    Delete,
    Insert,
    Motion,
    entry_for,
    is_backward,
    is_directional,
)
from quire.elements.paragraph import Paragraph
from quire.utils import LINE_SEPARATOR, MAX_COLUMN_WIDTH
from quire.view import TextBlockView

logger = logging.getLogger(__name__)


class TextBlock:
    def __init__(self, lines: Iterable[str] = ("",), *, max_column_width: int = MAX_COLUMN_WIDTH) -> None:
        self.max_column_width = max_column_width
        self.paragraphs = [Paragraph(line, max_column_width=max_column_width) for line in lines]
        if not self.paragraphs:
            self.paragraphs.append(Paragraph(max_column_width=max_column_width))
        self.active_line: int | None = None

    def __len__(self) -> int:
        return len(self.paragraphs)

    def __repr__(self) -> str:
        return f"TextBlock({len(self.paragraphs)} lines, active_line={self.active_line})"

    @property
    def text(self) -> str:
        return LINE_SEPARATOR.join(p.text for p in self.paragraphs)

    @property
    def focused(self) -> bool:
        return self.active_line is not None

    @property
    def focusable(self) -> bool:
        return bool(self.paragraphs)

    def cursor_column(self) -> int | None:
        if self.active_line is None:
            return None
        return self.paragraphs[self.active_line].cursor_column()

    # -- dispatch ------------------------------------------------------------

    def command(self, cmd: Command) -> bool:
        if self.active_line is None:
            return self._enter(cmd)

        index = self.active_line
        current = self.paragraphs[index]

        match cmd:
            case CursorLeave():
                current.command(cmd)
                self.active_line = None
                return True
            case Insert() if cmd.has_line_break:
                return self._insert_lines(current, cmd)
            case Delete(motion=Motion.LEFT) if current.cursor == 0 and index > 0:
                return self._join(index - 1)
            case Delete(motion=Motion.RIGHT) if current.cursor == len(current) and index + 1 < len(self.paragraphs):
                return self._join(index)

        if current.command(cmd):
            return True
        if not is_directional(cmd):
            return False

        target = index - 1 if is_backward(cmd) else index + 1
        if not 0 <= target < len(self.paragraphs):
            return False

        column = current.cursor_column() or 0
        current.command(LEAVE)
        self.active_line = target
        self.paragraphs[target].command(entry_for(cmd, column))
        return True

    def _enter(self, cmd: Command) -> bool:
        match cmd:
            case CursorEnterHorizontal(from_right=back) | CursorEnterVertical(from_bottom=back):
                self.active_line = len(self.paragraphs) - 1 if back else 0
            case _:
                return False
        self.paragraphs[self.active_line].command(cmd)
        return True

    def _insert_lines(self, current: Paragraph, cmd: Insert) -> bool:
        if current.cursor is None:
            return False
        result = current.buffer.insert(current.cursor, cmd.text)
        current.cursor = None

        at = self.paragraphs.index(current) + 1
        self.paragraphs[at:at] = [
            Paragraph.from_buffer(buffer, max_column_width=self.max_column_width) for buffer in result.new_lines
        ]
        self.active_line = at + result.new_line_count - 1
        self.paragraphs[self.active_line].cursor = result.cursor
        logger.debug("split into %d new lines", result.new_line_count)
        return True

    def _join(self, upper: int) -> bool:
        """Append line ``upper + 1`` to line ``upper`` and focus the join point."""
        top = self.paragraphs[upper]
        bottom = self.paragraphs.pop(upper + 1)
        join_at = len(top)
        top.buffer.extend(bottom.buffer)
        bottom.cursor = None
        top.cursor = join_at
        self.active_line = upper
        return True

    # -- content -------------------------------------------------------------

    def lines(self) -> list[GraphemeBuffer]:
        return [p.buffer for p in self.paragraphs]

    def view(self) -> TextBlockView:
        return TextBlockView(lines=tuple(p.view() for p in self.paragraphs), active_line=self.active_line)
