"""Editing session that keeps raw payload text and its structured view aligned.

A :class:`SiteframeEditor` is owned by whoever has the payload open. Raw edits
re-parse the text; structured edits go through :mod:`.editing` and are
serialized straight away so both views always describe the same payload. When
serialization fails the raw text stays at its last good value while the
structured document keeps the attempted edit, and :attr:`error` explains what
happened.

Example
-------
>>> from op_tools.siteframe import SiteframeEditor
>>> editor = SiteframeEditor('<!--siteframe:part type="header"-->\\nHi\\n<!--siteframe:/part-->')
>>> editor.set_part_content("part-0", "Hello")
>>> editor.dirty
True
"""

from __future__ import annotations

import logging
import typing as typ

from . import editing
from .models import SiteframeDocument, SiteframeSerializationError
from .normalizer import normalize_payload
from .parser import parse_payload
from .serializer import serialize_document

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

EMPTY_PAYLOAD_MESSAGE = "Payload is empty. Add markup in the raw editor first."
SERIALIZE_FAILED_MESSAGE = "Could not update the raw payload. Check your changes and try again."


class SiteframeEditor:
    """Hold one payload in raw and structured form plus a dirty flag.

    Attributes
    ----------
    raw : str
        Current payload text; what gets saved and synced.
    document : SiteframeDocument or None
        Structured view of :attr:`raw`; ``None`` while the payload is blank.
    dirty : bool
        True once any edit happened since the last :meth:`load` or
        :meth:`mark_saved`.
    error : str or None
        User-facing message describing the last failure, if any.
    """

    def __init__(self, payload: str | None = None) -> None:
        self.raw = ""
        self.document: SiteframeDocument | None = None
        self.dirty = False
        self.error: str | None = None
        self.load(payload)

    def load(self, payload: str | None) -> None:
        """Replace the session contents with a stored payload."""
        self._set_raw(normalize_payload(payload))
        self.dirty = False

    def mark_saved(self) -> None:
        """Clear the dirty flag after the payload was persisted."""
        self.dirty = False

    def edit_raw(self, text: str) -> None:
        """Apply an edit made in the raw text view."""
        self._set_raw(text)
        self.dirty = True

    def _set_raw(self, text: str) -> None:
        self.raw = text
        if not text.strip():
            self.document = None
            self.error = EMPTY_PAYLOAD_MESSAGE
            return
        self.document = parse_payload(text)
        self.error = None

    def _apply(self, update: cabc.Callable[[SiteframeDocument], SiteframeDocument]) -> None:
        if self.document is None:
            return
        self.document = update(self.document)
        self.dirty = True
        try:
            self.raw = serialize_document(self.document)
        except SiteframeSerializationError:
            logger.exception("Failed to serialize siteframe document")
            self.error = SERIALIZE_FAILED_MESSAGE
            return
        self.error = None

    def set_part_type(self, part_id: str, value: str) -> None:
        self._apply(lambda doc: editing.set_part_type(doc, part_id, value))

    def set_part_attribute(self, part_id: str, key: str, value: str) -> None:
        self._apply(lambda doc: editing.set_part_attribute(doc, part_id, key, value))

    def set_part_content(self, part_id: str, value: str) -> None:
        self._apply(lambda doc: editing.set_part_content(doc, part_id, value))

    def set_page_attribute(self, page_id: str, key: str, value: str) -> None:
        self._apply(lambda doc: editing.set_page_attribute(doc, page_id, key, value))

    def set_page_home(self, page_id: str, checked: bool) -> None:
        self._apply(lambda doc: editing.set_page_home(doc, page_id, checked))

    def set_block_content(self, page_id: str, block_id: str, value: str) -> None:
        self._apply(lambda doc: editing.set_block_content(doc, page_id, block_id, value))

    def set_block_attribute(
        self, page_id: str, block_id: str, key: str, value: str
    ) -> None:
        self._apply(
            lambda doc: editing.set_block_attribute(doc, page_id, block_id, key, value)
        )


__all__ = ["EMPTY_PAYLOAD_MESSAGE", "SERIALIZE_FAILED_MESSAGE", "SiteframeEditor"]
