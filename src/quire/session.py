"""Editing session: the single owner of a document.

Runs one command at a time to completion: dispatch through the document,
absorb navigation past the document edges, report multi-line inserts into
single-line regions, and re-style the whole document after every edit.
"""

from __future__ import annotations

import logging

from quire.commands import Command, CursorEnterHorizontal, Insert, is_directional, is_mutating
from quire.document import Document
from quire.errors import MultilineInsertError
from quire.parser import parse_document
from quire.settings import EngineSettings
from quire.styles import StyleAnnotator
from quire.view import DocumentView

logger = logging.getLogger(__name__)


class EditingSession:
    def __init__(
        self,
        document: Document | None = None,
        *,
        settings: EngineSettings | None = None,
        annotator: StyleAnnotator | None = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.document = document if document is not None else Document()
        self._annotator = annotator or StyleAnnotator()
        self.restyle()

    @classmethod
    def from_markdown(cls, source: str, *, settings: EngineSettings | None = None) -> EditingSession:
        """Parse *source* and focus the start of the document."""
        settings = settings or EngineSettings()
        document = parse_document(
            source,
            keep_text=settings.keep_text_blocks,
            max_column_width=settings.max_column_width,
        )
        session = cls(document, settings=settings)
        session.focus()
        return session

    def focus(self) -> bool:
        """Put the cursor at the start of the document unless it already has one."""
        if self.document.focused:
            return True
        return self.document.command(CursorEnterHorizontal(from_right=False))

    def apply(self, cmd: Command) -> bool:
        """Dispatch *cmd*; returns whether any region handled it.

        A line break inserted into a single-line region is an unsupported
        edit, not an unhandled command: the :class:`MultilineInsertError` is
        logged and re-raised, and the document is left unchanged.
        """
        try:
            handled = self.document.command(cmd)
        except MultilineInsertError as e:
            logger.warning("insert rejected: %s", e)
            raise

        if not handled and is_directional(cmd):
            logger.debug("%s at document edge ignored", type(cmd).__name__)
        if handled and is_mutating(cmd) and self.settings.restyle_on_edit:
            self.restyle()
        return handled

    def insert_text(self, text: str) -> bool:
        return self.apply(Insert.from_text(text))

    def restyle(self) -> None:
        self.document.restyle(self._annotator)

    def view(self) -> DocumentView:
        return self.document.view()

    @property
    def text(self) -> str:
        return self.document.text
