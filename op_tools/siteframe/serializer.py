r"""Render :class:`SiteframeDocument` values back into payload text.

The output uses the canonical delimiter spelling understood by the site
generator. Parts come first, then pages; groups and entries are separated by
blank lines and block delimiters are indented by four spaces.

Example
-------
>>> from op_tools.siteframe.models import SiteframeDocument, SiteframePart
>>> part = SiteframePart(id="part-0", type="header", attributes={}, content="Hi")
>>> print(serialize_document(SiteframeDocument(parts=(part,))))
<!--siteframe:part type="header"-->
Hi
<!--siteframe:/part-->
"""

from __future__ import annotations

import typing as typ

from .._constants import BLOCK_INDENT, CLOSE_TAG_TEMPLATE, OPEN_TAG_TEMPLATE
from .models import (
    SiteframeBlock,
    SiteframeDocument,
    SiteframePage,
    SiteframePart,
    SiteframeSerializationError,
)
from .parser import ATTRIBUTE_NAME_PATTERN

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def _require_text(value: object, what: str) -> str:
    if not isinstance(value, str):
        msg = f"{what} must be a string, got {type(value).__name__}"
        raise SiteframeSerializationError(msg)
    return value


def format_attributes(attributes: cabc.Mapping[str, str]) -> str:
    """Return ``key="value"`` pairs joined by spaces, escaping ``"``.

    Raises
    ------
    SiteframeSerializationError
        If a key or value is not a string, or a key is not a run of word
        characters the parser would read back unchanged.
    """
    pairs: list[str] = []
    for key, value in attributes.items():
        name = _require_text(key, "Attribute name")
        if not ATTRIBUTE_NAME_PATTERN.fullmatch(name):
            msg = f"Attribute name {name!r} must only contain letters, digits or underscores"
            raise SiteframeSerializationError(msg)
        escaped = _require_text(value, f"Attribute '{name}'").replace('"', "&quot;")
        pairs.append(f'{name}="{escaped}"')
    return " ".join(pairs).strip()


def _open_tag(kind: str, attributes: cabc.Mapping[str, str]) -> str:
    attr_string = format_attributes(attributes)
    attr_section = f" {attr_string}" if attr_string else ""
    return f"{OPEN_TAG_TEMPLATE.format(kind=kind)}{attr_section}-->"


def _typed_attributes(entity: SiteframePart | SiteframeBlock) -> dict[str, str]:
    """Merge ``entity.type`` into its attributes; the field always wins."""
    kind = _require_text(entity.type, f"Type of {entity.id}")
    return {**entity.attributes, "type": kind}


def _serialize_part(part: SiteframePart) -> str:
    content = _require_text(part.content, f"Content of {part.id}").strip()
    return "\n".join(
        [
            _open_tag("part", _typed_attributes(part)),
            content,
            CLOSE_TAG_TEMPLATE.format(kind="part"),
        ]
    )


def _serialize_block(block: SiteframeBlock) -> str:
    content = _require_text(block.content, f"Content of {block.id}").strip()
    return "\n".join(
        [
            f"{BLOCK_INDENT}{_open_tag('block', _typed_attributes(block))}",
            content,
            f"{BLOCK_INDENT}{CLOSE_TAG_TEMPLATE.format(kind='block')}",
        ]
    )


def _serialize_page(page: SiteframePage) -> str:
    blocks = "\n\n".join(_serialize_block(block) for block in page.blocks)
    return "\n".join(
        [
            _open_tag("page", page.attributes),
            blocks,
            CLOSE_TAG_TEMPLATE.format(kind="page"),
        ]
    )


def serialize_document(doc: SiteframeDocument) -> str:
    """Return the canonical payload text for ``doc``.

    Parameters
    ----------
    doc : SiteframeDocument
        Document to render. Page attributes are written verbatim; part and
        block attributes always include ``type`` taken from the entity.

    Returns
    -------
    str
        Payload text with surrounding whitespace trimmed. An empty document
        renders as ``""``.

    Raises
    ------
    SiteframeSerializationError
        If the document holds a non-string type, attribute, or content.
    """
    parts = "\n\n".join(_serialize_part(part) for part in doc.parts)
    pages = "\n\n".join(_serialize_page(page) for page in doc.pages)
    return "\n\n".join(group for group in (parts, pages) if group).strip()


__all__ = ["format_attributes", "serialize_document"]
