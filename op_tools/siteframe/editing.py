"""Copy-on-write edits for :class:`SiteframeDocument` values.

Each helper returns a new document in which only the addressed entity (and
the containers leading to it) are replaced; every other part, page, and block
is the very same object as before. An id that matches nothing leaves the
document untouched and the helper returns it as-is.

Parts and blocks keep ``type`` and ``attributes["type"]`` in sync whichever
of the two is edited.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .._constants import HOME_ATTRIBUTE, HOME_FLAG
from .models import SiteframeBlock, SiteframeDocument, SiteframePage, SiteframePart

if typ.TYPE_CHECKING:
    import collections.abc as cabc

_Entity = typ.TypeVar("_Entity", SiteframePart, SiteframePage, SiteframeBlock)
_Typed = typ.TypeVar("_Typed", SiteframePart, SiteframeBlock)


def _replace_by_id(
    items: tuple[_Entity, ...],
    item_id: str,
    update: cabc.Callable[[_Entity], _Entity],
) -> tuple[_Entity, ...] | None:
    """Return ``items`` with the entity ``item_id`` updated, or None if absent."""
    for idx, item in enumerate(items):
        if item.id == item_id:
            return (*items[:idx], update(item), *items[idx + 1 :])
    return None


def _with_type(entity: _Typed, value: str) -> _Typed:
    return dc.replace(entity, type=value, attributes={**entity.attributes, "type": value})


def _with_attribute(entity: _Typed, key: str, value: str) -> _Typed:
    if key == "type":
        return _with_type(entity, value)
    return dc.replace(entity, attributes={**entity.attributes, key: value})


def _update_part(
    doc: SiteframeDocument,
    part_id: str,
    update: cabc.Callable[[SiteframePart], SiteframePart],
) -> SiteframeDocument:
    parts = _replace_by_id(doc.parts, part_id, update)
    return doc if parts is None else dc.replace(doc, parts=parts)


def _update_page(
    doc: SiteframeDocument,
    page_id: str,
    update: cabc.Callable[[SiteframePage], SiteframePage],
) -> SiteframeDocument:
    pages = _replace_by_id(doc.pages, page_id, update)
    return doc if pages is None else dc.replace(doc, pages=pages)


def _update_block(
    doc: SiteframeDocument,
    page_id: str,
    block_id: str,
    update: cabc.Callable[[SiteframeBlock], SiteframeBlock],
) -> SiteframeDocument:
    page = next((page for page in doc.pages if page.id == page_id), None)
    if page is None:
        return doc
    blocks = _replace_by_id(page.blocks, block_id, update)
    if blocks is None:
        return doc
    return _update_page(doc, page_id, lambda current: dc.replace(current, blocks=blocks))


def set_part_type(doc: SiteframeDocument, part_id: str, value: str) -> SiteframeDocument:
    """Change a part's type, cascading into ``attributes["type"]``."""
    return _update_part(doc, part_id, lambda part: _with_type(part, value))


def set_part_attribute(
    doc: SiteframeDocument, part_id: str, key: str, value: str
) -> SiteframeDocument:
    """Set one attribute of a part; ``key == "type"`` also updates ``type``."""
    return _update_part(doc, part_id, lambda part: _with_attribute(part, key, value))


def set_part_content(doc: SiteframeDocument, part_id: str, value: str) -> SiteframeDocument:
    """Replace a part's content."""
    return _update_part(doc, part_id, lambda part: dc.replace(part, content=value))


def set_page_attribute(
    doc: SiteframeDocument, page_id: str, key: str, value: str
) -> SiteframeDocument:
    """Set one attribute of a page. Pages have no ``type`` field to mirror."""
    return _update_page(
        doc,
        page_id,
        lambda page: dc.replace(page, attributes={**page.attributes, key: value}),
    )


def set_page_home(doc: SiteframeDocument, page_id: str, checked: bool) -> SiteframeDocument:
    """Mark a page as the homepage or clear the mark.

    Setting writes ``home="true"``; clearing deletes the ``home`` key. A
    ``"false"`` value is never written.
    """

    def _toggle(page: SiteframePage) -> SiteframePage:
        attributes = dict(page.attributes)
        if checked:
            attributes[HOME_ATTRIBUTE] = HOME_FLAG
        else:
            attributes.pop(HOME_ATTRIBUTE, None)
        return dc.replace(page, attributes=attributes)

    return _update_page(doc, page_id, _toggle)


def set_block_content(
    doc: SiteframeDocument, page_id: str, block_id: str, value: str
) -> SiteframeDocument:
    """Replace the content of the block addressed by ``(page_id, block_id)``."""
    return _update_block(
        doc, page_id, block_id, lambda block: dc.replace(block, content=value)
    )


def set_block_attribute(
    doc: SiteframeDocument, page_id: str, block_id: str, key: str, value: str
) -> SiteframeDocument:
    """Set one attribute of a block; ``key == "type"`` also updates ``type``."""
    return _update_block(
        doc, page_id, block_id, lambda block: _with_attribute(block, key, value)
    )


__all__ = [
    "set_block_attribute",
    "set_block_content",
    "set_page_attribute",
    "set_page_home",
    "set_part_attribute",
    "set_part_content",
    "set_part_type",
]
