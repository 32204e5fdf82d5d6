"""Table element: a sparse grid of paragraphs with one active cell."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from quire.buffer import GraphemeBuffer
from quire.commands import (
    LEAVE,
    Command,
    CursorEnterHorizontal,
    CursorEnterVertical,
    CursorLeave,
    Down,
    Left,
    Right,
    Up,
    entry_for,
    is_directional,
)
from quire.elements.paragraph import Paragraph
from quire.styles import StyleKind
from quire.utils import MAX_COLUMN_WIDTH
from quire.view import Coord, TableView

logger = logging.getLogger(__name__)

_CELL_STYLES = frozenset({StyleKind.TABLE_BLOCK, StyleKind.TABLE_CELL_BOUNDARY})
_HEADER_STYLES = _CELL_STYLES | {StyleKind.TABLE_HEADER, StyleKind.STRONG}


class Table:
    """Cells keyed by ``(column, row)``; row 0 is the header row.

    While ``active_cell`` is set, that cell's paragraph holds the only cursor in
    the table. Only coordinates present in ``cells`` are ever activated.
    """

    def __init__(
        self,
        cells: Mapping[Coord, Paragraph] | None = None,
        width: int = 0,
        height: int = 0,
    ) -> None:
        self.cells: dict[Coord, Paragraph] = dict(cells or {})
        self.width = width
        self.height = height
        self.active_cell: Coord | None = None

    @classmethod
    def from_rows(cls, rows: list[list[str]], *, max_column_width: int = MAX_COLUMN_WIDTH) -> Table:
        cells = {
            (column, row): Paragraph(text, max_column_width=max_column_width)
            for row, values in enumerate(rows)
            for column, text in enumerate(values)
        }
        width = max((len(values) for values in rows), default=0)
        return cls(cells, width=width, height=len(rows))

    def __repr__(self) -> str:
        return f"Table({self.width}x{self.height}, active_cell={self.active_cell})"

    def cell(self, column: int, row: int) -> Paragraph | None:
        return self.cells.get((column, row))

    @property
    def focused(self) -> bool:
        return self.active_cell is not None

    @property
    def focusable(self) -> bool:
        return bool(self.cells)

    def cursor_column(self) -> int | None:
        if self.active_cell is None:
            return None
        return self.cells[self.active_cell].cursor_column()

    # -- dispatch ------------------------------------------------------------

    def command(self, cmd: Command) -> bool:
        if self.active_cell is None:
            return self._enter(cmd)

        current = self.cells[self.active_cell]
        if isinstance(cmd, CursorLeave):
            current.command(cmd)
            self.active_cell = None
            return True

        if current.command(cmd):
            return True
        if not is_directional(cmd):
            return False

        target = self._neighbor(self.active_cell, cmd)
        if target is None:
            return False

        column = current.cursor_column() or 0
        current.command(LEAVE)
        logger.debug("table focus %s -> %s", self.active_cell, target)
        self.active_cell = target
        self.cells[target].command(entry_for(cmd, column))
        return True

    def _enter(self, cmd: Command) -> bool:
        match cmd:
            case CursorEnterHorizontal(from_right=False) | CursorEnterVertical(from_bottom=False):
                target = self._edge_row_cell(bottom=False, last=False)
            case CursorEnterHorizontal(from_right=True):
                target = self._edge_row_cell(bottom=True, last=True)
            case CursorEnterVertical(from_bottom=True):
                target = self._edge_row_cell(bottom=True, last=False)
            case _:
                return False

        if target is None:
            return False
        self.active_cell = target
        self.cells[target].command(cmd)
        return True

    def _edge_row_cell(self, *, bottom: bool, last: bool) -> Coord | None:
        """First or last existing cell of the top or bottom row.

        From the top this is ``(0, 0)`` whenever that cell exists.
        """
        if not self.cells:
            return None
        rows = [r for _, r in self.cells]
        row = max(rows) if bottom else min(rows)
        columns = [c for c, r in self.cells if r == row]
        return (max(columns) if last else min(columns), row)

    def _neighbor(self, coord: Coord, cmd: Command) -> Coord | None:
        column, row = coord
        match cmd:
            case Left() if column > 0:
                target = (column - 1, row)
            case Right():
                target = (column + 1, row)
            case Up() if row > 0:
                target = (column, row - 1)
            case Down():
                target = (column, row + 1)
            case _:
                return None
        return target if target in self.cells else None

    # -- content -------------------------------------------------------------

    def lines(self) -> list[GraphemeBuffer]:
        """Cell buffers in row-major order."""
        return [self.cells[coord].buffer for coord in sorted(self.cells, key=lambda c: (c[1], c[0]))]

    def add_structure(self) -> None:
        """Add block and cell styles to every cell, plus header styles on row 0.

        Runs after the inline annotation of the document text, which sees the
        cells only as plain lines.
        """
        for (_, row), paragraph in self.cells.items():
            structural = _HEADER_STYLES if row == 0 else _CELL_STYLES
            for g in paragraph.buffer:
                g.styles = g.styles | structural

    def view(self) -> TableView:
        return TableView(
            width=self.width,
            height=self.height,
            cells={coord: paragraph.view() for coord, paragraph in self.cells.items()},
            active_cell=self.active_cell,
        )
