"""quire: structured-text editing engine with grapheme-aware buffers."""

# Grapheme buffer
from quire.buffer import Grapheme, GraphemeBuffer, InsertResult

# Commands
from quire.commands import (
    DOWN,
    LEAVE,
    LEFT,
    RIGHT,
    UP,
    Command,
    CursorEnterHorizontal,
    CursorEnterVertical,
    CursorLeave,
    Delete,
    Down,
    Insert,
    Left,
    Motion,
    Right,
    Up,
)

# Document hierarchy
from quire.document import Document
from quire.elements import Element, Paragraph, Table, TextBlock

# Errors
from quire.errors import MultilineInsertError, QuireError, SettingsError

# Markdown ingestion
from quire.parser import parse_document

# Session and settings
from quire.session import EditingSession
from quire.settings import EngineSettings

# Styles
from quire.styles import EdgePosition, StyleAnnotation, StyleAnnotator, StyleKind, edge_position

# Views
from quire.view import DocumentView, GraphemeView, ParagraphView, TableView, TextBlockView

__all__ = [
    # Buffer
    "Grapheme",
    "GraphemeBuffer",
    "InsertResult",
    # Commands
    "DOWN",
    "LEAVE",
    "LEFT",
    "RIGHT",
    "UP",
    "Command",
    "CursorEnterHorizontal",
    "CursorEnterVertical",
    "CursorLeave",
    "Delete",
    "Down",
    "Insert",
    "Left",
    "Motion",
    "Right",
    "Up",
    # Document hierarchy
    "Document",
    "Element",
    "Paragraph",
    "Table",
    "TextBlock",
    # Errors
    "MultilineInsertError",
    "QuireError",
    "SettingsError",
    # Parser
    "parse_document",
    # Session and settings
    "EditingSession",
    "EngineSettings",
    # Styles
    "EdgePosition",
    "StyleAnnotation",
    "StyleAnnotator",
    "StyleKind",
    "edge_position",
    # Views
    "DocumentView",
    "GraphemeView",
    "ParagraphView",
    "TableView",
    "TextBlockView",
]
