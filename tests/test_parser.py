"""Tests for quire.parser.parse_document -- markdown ingestion."""

from __future__ import annotations

from quire.elements import Table, TextBlock
from quire.parser import parse_document

SOURCE = """\
# Title

Some *text* here.

| Name | Value |
|------|-------|
| **a** | 1 |
| b |

- item
"""


class TestParseTables:
    """Tables become sparse cell grids."""

    def test_only_tables_by_default(self) -> None:
        doc = parse_document(SOURCE)
        assert len(doc.elements) == 1
        assert isinstance(doc.elements[0], Table)

    def test_grid_dimensions(self) -> None:
        table = parse_document(SOURCE).elements[0]
        assert (table.width, table.height) == (2, 3)

    def test_cells_keep_inline_source(self) -> None:
        table = parse_document(SOURCE).elements[0]
        assert table.cell(0, 0).text == "Name"
        assert table.cell(1, 0).text == "Value"
        assert table.cell(0, 1).text == "**a**"
        assert table.cell(1, 1).text == "1"

    def test_short_row_gets_empty_cell(self) -> None:
        table = parse_document(SOURCE).elements[0]
        assert table.cell(0, 2).text == "b"
        assert table.cell(1, 2) is not None
        assert table.cell(1, 2).text == ""

    def test_cells_start_unfocused(self) -> None:
        table = parse_document(SOURCE).elements[0]
        assert table.active_cell is None
        assert all(p.cursor is None for p in table.cells.values())

    def test_two_tables(self) -> None:
        source = "| a |\n|---|\n| b |\n\ntext\n\n| c | d |\n|---|---|\n"
        doc = parse_document(source)
        assert len(doc.elements) == 2
        second = doc.elements[1]
        assert (second.width, second.height) == (2, 1)
        assert second.cell(1, 0).text == "d"

    def test_no_tables(self) -> None:
        assert parse_document("just a paragraph").elements == []

    def test_max_column_width_is_passed_to_cells(self) -> None:
        table = parse_document("| 好 |\n|---|\n", max_column_width=1).elements[0]
        assert table.cell(0, 0).max_column_width == 1


class TestParseTextBlocks:
    """Other blocks are kept as text when asked."""

    def test_keep_text_blocks(self) -> None:
        doc = parse_document(SOURCE, keep_text=True)
        kinds = [type(element) for element in doc.elements]
        assert kinds == [TextBlock, TextBlock, Table, TextBlock]

    def test_text_blocks_hold_source_lines(self) -> None:
        doc = parse_document(SOURCE, keep_text=True)
        assert doc.elements[0].text == "# Title"
        assert doc.elements[1].text == "Some *text* here."
        assert doc.elements[3].text == "- item"

    def test_multiline_paragraph(self) -> None:
        doc = parse_document("one\ntwo\n\nthree", keep_text=True)
        assert [element.text for element in doc.elements] == ["one\ntwo", "three"]
