"""Typed dataclasses describing a parsed siteframe payload.

Ordered collections are tuples and every dataclass is frozen, so edits are
expressed with :func:`dataclasses.replace` and leave untouched entities
shared between the old and the new document.

Entity attributes are plain ``dict`` values, so entities and any document
holding them are unhashable despite being frozen; compare them with ``==``.
"""

from __future__ import annotations

import dataclasses as dc

from .._constants import HOME_ATTRIBUTE, HOME_FLAG


class SiteframeSerializationError(ValueError):
    """Raised when an in-memory document cannot be rendered as a payload."""


@dc.dataclass(slots=True, frozen=True)
class SiteframePart:
    """Reusable global fragment such as a header or footer template.

    Attributes
    ----------
    id : str
        Synthetic identifier (``part-0``, ``part-1``...) assigned at parse
        time; never written to the payload.
    type : str
        Short tag mirrored into ``attributes["type"]``.
    attributes : dict[str, str]
        Attribute mapping from the opening delimiter.
    content : str
        Trimmed text between the delimiters.
    """

    id: str
    type: str
    attributes: dict[str, str]
    content: str


@dc.dataclass(slots=True, frozen=True)
class SiteframeBlock:
    """Content unit nested inside exactly one page."""

    id: str
    type: str
    attributes: dict[str, str]
    content: str


@dc.dataclass(slots=True, frozen=True)
class SiteframePage:
    """One site page with its attributes and ordered blocks.

    Attributes
    ----------
    id : str
        Synthetic identifier (``page-0``...).
    attributes : dict[str, str]
        Page attributes such as ``title``, ``slug``, ``name``, ``template``
        and ``home``.
    blocks : tuple[SiteframeBlock, ...]
        Blocks in source order.
    """

    id: str
    attributes: dict[str, str]
    blocks: tuple[SiteframeBlock, ...] = ()

    @property
    def is_home(self) -> bool:
        """Return True when the page carries ``home="true"``."""
        return self.attributes.get(HOME_ATTRIBUTE) == HOME_FLAG


@dc.dataclass(slots=True, frozen=True)
class SiteframeDocument:
    """Root value holding the parts and pages of a payload."""

    parts: tuple[SiteframePart, ...] = ()
    pages: tuple[SiteframePage, ...] = ()

    @classmethod
    def empty(cls) -> SiteframeDocument:
        """Return a document without parts or pages."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.parts and not self.pages


__all__ = [
    "SiteframeBlock",
    "SiteframeDocument",
    "SiteframePage",
    "SiteframePart",
    "SiteframeSerializationError",
]
