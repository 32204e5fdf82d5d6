"""Document elements and their shared capability set.

``Element`` is a closed union. Every capability is a function that matches
on the concrete type, so adding an element kind means extending the union and
each ``match`` below.
"""

from __future__ import annotations

from quire.buffer import GraphemeBuffer
from quire.commands import Command
from quire.elements.paragraph import Paragraph
from quire.elements.table import Table
from quire.elements.text_block import TextBlock
from quire.view import ElementView

Element = Table | TextBlock


def command(element: Element, cmd: Command) -> bool:
    match element:
        case Table() | TextBlock():
            return element.command(cmd)
    raise TypeError(f"not an element: {element!r}")


def view(element: Element) -> ElementView:
    match element:
        case Table() | TextBlock():
            return element.view()
    raise TypeError(f"not an element: {element!r}")


def lines(element: Element) -> list[GraphemeBuffer]:
    match element:
        case Table() | TextBlock():
            return element.lines()
    raise TypeError(f"not an element: {element!r}")


def focused(element: Element) -> bool:
    match element:
        case Table() | TextBlock():
            return element.focused
    raise TypeError(f"not an element: {element!r}")


def focusable(element: Element) -> bool:
    match element:
        case Table() | TextBlock():
            return element.focusable
    raise TypeError(f"not an element: {element!r}")


def cursor_column(element: Element) -> int | None:
    match element:
        case Table() | TextBlock():
            return element.cursor_column()
    raise TypeError(f"not an element: {element!r}")


def add_structure(element: Element) -> None:
    """Overlay the styles an element carries beyond its inline markup."""
    match element:
        case Table():
            element.add_structure()
        case TextBlock():
            pass
        case _:
            raise TypeError(f"not an element: {element!r}")


__all__ = [
    "Element",
    "Paragraph",
    "Table",
    "TextBlock",
    "add_structure",
    "command",
    "cursor_column",
    "focusable",
    "focused",
    "lines",
    "view",
]
