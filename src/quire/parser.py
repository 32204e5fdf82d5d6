"""Markdown ingestion: build a :class:`Document` from markdown source."""

from __future__ import annotations

import logging

from markdown_it import MarkdownIt

from quire.document import Document
from quire.elements import Element, Paragraph, Table, TextBlock
from quire.utils import MAX_COLUMN_WIDTH, split_lines

logger = logging.getLogger(__name__)


class _TableBuilder:
    """Accumulates cells while walking the tokens of one table."""

    def __init__(self, max_column_width: int) -> None:
        self.max_column_width = max_column_width
        self.cells: dict[tuple[int, int], Paragraph] = {}
        self.column = 0
        self.row = 0
        self.width = 0
        self._parts: list[str] | None = None

    @property
    def in_cell(self) -> bool:
        return self._parts is not None

    def open_cell(self) -> None:
        self._parts = []

    def append(self, text: str) -> None:
        if self._parts is not None:
            self._parts.append(text)

    def close_cell(self) -> None:
        text = "".join(self._parts or [])
        self.cells[(self.column, self.row)] = Paragraph(text, max_column_width=self.max_column_width)
        self._parts = None
        self.column += 1
        self.width = max(self.width, self.column)

    def start_row(self) -> None:
        self.column = 0

    def end_row(self) -> None:
        self.row += 1

    def build(self) -> Table:
        return Table(self.cells, width=self.width, height=self.row)


def parse_document(
    source: str,
    *,
    keep_text: bool = False,
    max_column_width: int = MAX_COLUMN_WIDTH,
    md: MarkdownIt | None = None,
) -> Document:
    """Parse *source* into a document.

    Every table becomes a :class:`Table` whose cells hold the raw markdown of
    their inline content. Other top-level blocks are dropped unless
    *keep_text* is set, in which case each becomes a :class:`TextBlock` of
    its source lines.
    """
    md = md or MarkdownIt("commonmark").enable("table")
    tokens = md.parse(source)
    source_lines = split_lines(source)

    items: list[Element] = []
    table: _TableBuilder | None = None

    for token in tokens:
        match token.type:
            case "table_open":
                table = _TableBuilder(max_column_width)
            case "tr_open" if table is not None:
                table.start_row()
            case "th_open" | "td_open" if table is not None:
                table.open_cell()
            case "inline" if table is not None and table.in_cell:
                table.append(token.content)
            case "th_close" | "td_close" if table is not None:
                table.close_cell()
            case "tr_close" if table is not None:
                table.end_row()
            case "table_close" if table is not None:
                items.append(table.build())
                table = None
            case _ if table is not None:
                pass
            case _ if keep_text and token.level == 0 and token.nesting >= 0 and token.map:
                start, end = token.map
                items.append(TextBlock(source_lines[start:end], max_column_width=max_column_width))
            case _:
                if token.level == 0 and token.nesting >= 0:
                    logger.debug("ignoring %s block", token.type)

    return Document(items)
