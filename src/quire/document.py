"""Document: the ordered top-level elements and the root of command dispatch."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from quire import elements
from quire.buffer import GraphemeBuffer
from quire.commands import (
    LEAVE,
    Command,
    CursorEnterHorizontal,
    CursorEnterVertical,
    entry_for,
    is_backward,
    is_directional,
)
from quire.elements import Element
from quire.styles import StyleAnnotator
from quire.utils import LINE_SEPARATOR
from quire.view import DocumentView

logger = logging.getLogger(__name__)


class Document:
    """Elements in reading order, one of which is active.

    Commands go to the active element first. When it cannot handle a
    directional command, focus moves to the previous or next element that
    can take a cursor; at either end of the document the command is
    reported as unhandled.
    """

    def __init__(self, items: Iterable[Element] = ()) -> None:
        self.elements: list[Element] = list(items)
        self.active_element = 0

    def __len__(self) -> int:
        return len(self.elements)

    def __repr__(self) -> str:
        return f"Document({len(self.elements)} elements, active_element={self.active_element})"

    @property
    def active(self) -> Element | None:
        return self.elements[self.active_element] if self.elements else None

    @property
    def focused(self) -> bool:
        return self.active is not None and elements.focused(self.active)

    def cursor_column(self) -> int | None:
        return elements.cursor_column(self.active) if self.active is not None else None

    # -- dispatch ------------------------------------------------------------

    def command(self, cmd: Command) -> bool:
        if not self.elements:
            return False

        match cmd:
            case CursorEnterHorizontal(from_right=back) | CursorEnterVertical(from_bottom=back):
                return self._enter(cmd, back)

        if not self.focused:
            return False

        active = self.elements[self.active_element]
        if elements.command(active, cmd):
            return True
        if not is_directional(cmd):
            return False

        target = self._next_focusable(self.active_element, backward=is_backward(cmd))
        if target is None:
            return False

        # The neighbor takes the cursor before the active element gives it up.
        column = elements.cursor_column(active) or 0
        if not elements.command(self.elements[target], entry_for(cmd, column)):
            logger.debug("element %d refused entry", target)
            return False
        elements.command(active, LEAVE)
        logger.debug("document focus %d -> %d", self.active_element, target)
        self.active_element = target
        return True

    def _enter(self, cmd: Command, back: bool) -> bool:
        if self.focused:
            elements.command(self.elements[self.active_element], LEAVE)

        order = range(len(self.elements) - 1, -1, -1) if back else range(len(self.elements))
        for index in order:
            if elements.focusable(self.elements[index]):
                self.active_element = index
                return elements.command(self.elements[index], cmd)
        return False

    def _next_focusable(self, index: int, *, backward: bool) -> int | None:
        step = -1 if backward else 1
        index += step
        while 0 <= index < len(self.elements):
            if elements.focusable(self.elements[index]):
                return index
            index += step
        return None

    # -- content -------------------------------------------------------------

    def lines(self) -> list[GraphemeBuffer]:
        return [line for element in self.elements for line in elements.lines(element)]

    @property
    def text(self) -> str:
        return LINE_SEPARATOR.join(str(line) for line in self.lines())

    def restyle(self, annotator: StyleAnnotator) -> None:
        """Annotate the whole document text at once, then overlay table structure."""
        annotator.restyle(self.lines())
        for element in self.elements:
            elements.add_structure(element)

    def view(self) -> DocumentView:
        return DocumentView(
            elements=tuple(elements.view(element) for element in self.elements),
            active_element=self.active_element if self.focused else None,
        )
