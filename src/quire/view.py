"""Read-only snapshots handed to renderers.

Views are plain frozen dataclasses built on demand from the live document;
they carry everything needed to draw a region (grapheme text, display
width, style set, edge adjacency per style, cursor) and nothing else.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from quire.buffer import GraphemeBuffer
from quire.styles import EdgePosition, StyleKind, edge_position

Coord = tuple[int, int]


@dataclass(frozen=True)
class GraphemeView:
    text: str
    width: int
    styles: frozenset[StyleKind] = frozenset()
    edges: Mapping[StyleKind, EdgePosition] = field(default_factory=dict)


@dataclass(frozen=True)
class ParagraphView:
    """One line as drawn.

    ``focused_index`` is the grapheme under the cursor; it is ``None`` when the
    cursor sits past the last grapheme or the paragraph is not focused.
    """

    graphemes: tuple[GraphemeView, ...]
    cursor: int | None = None
    focused_index: int | None = None

    @property
    def text(self) -> str:
        return "".join(g.text for g in self.graphemes)


@dataclass(frozen=True)
class TableView:
    width: int
    height: int
    cells: Mapping[Coord, ParagraphView]
    active_cell: Coord | None = None


@dataclass(frozen=True)
class TextBlockView:
    lines: tuple[ParagraphView, ...]
    active_line: int | None = None


ElementView = TableView | TextBlockView


@dataclass(frozen=True)
class DocumentView:
    elements: tuple[ElementView, ...]
    active_element: int | None = None


def paragraph_view(buffer: GraphemeBuffer, cursor: int | None) -> ParagraphView:
    graphemes = tuple(
        GraphemeView(
            text=g.text,
            width=g.width,
            styles=g.styles,
            edges={kind: edge_position(buffer, i, kind) for kind in g.styles},
        )
        for i, g in enumerate(buffer)
    )
    focused = cursor if cursor is not None and cursor < len(graphemes) else None
    return ParagraphView(graphemes=graphemes, cursor=cursor, focused_index=focused)
