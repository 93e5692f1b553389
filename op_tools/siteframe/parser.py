r"""Parse siteframe payloads into structured documents.

A payload is plain text holding HTML-comment delimited regions: reusable
parts at the top level, and pages that in turn hold blocks. Each opening
delimiter carries ``key="value"`` attributes. The parser is deliberately
forgiving because payloads are hand-edited: unterminated regions are simply
not recognized and nothing here raises.

Example
-------
>>> from op_tools.siteframe.parser import parse_payload
>>> doc = parse_payload(
...     '<!--siteframe:part type="header"-->\nHELLO\n<!--siteframe:/part-->'
... )
>>> doc.parts[0].type, doc.parts[0].content
('header', 'HELLO')
"""

from __future__ import annotations

import re

from .._constants import DEFAULT_BLOCK_TYPE, DEFAULT_PART_TYPE
from .models import SiteframeBlock, SiteframeDocument, SiteframePage, SiteframePart
from .normalizer import normalize_payload

ATTRIBUTE_NAME_PATTERN = re.compile(r"\w+")
ATTRIBUTE_PATTERN = re.compile(r'(\w+)="([^"]*)"')


def _region_pattern(kind: str) -> re.Pattern[str]:
    """Build the scan pattern for one delimiter kind.

    Closing tags are accepted in the canonical ``<!--siteframe:/kind-->``
    form and in the legacy ``<!--/siteframe:kind-->`` form. Quoted
    attribute values may contain ``>``.
    """
    return re.compile(
        rf'<!--siteframe:{kind}((?:[^>"]|"[^"]*")*)-->(.*?)'
        rf"<!--(?:siteframe:/|/siteframe:){kind}-->",
        re.IGNORECASE | re.DOTALL,
    )


PART_PATTERN = _region_pattern("part")
PAGE_PATTERN = _region_pattern("page")
BLOCK_PATTERN = _region_pattern("block")


def parse_attributes(raw: str) -> dict[str, str]:
    """Return the ``key="value"`` pairs found in ``raw``.

    Values are captured verbatim; ``&quot;`` is not decoded. A repeated key
    keeps its last value.
    """
    return {match.group(1): match.group(2) for match in ATTRIBUTE_PATTERN.finditer(raw)}


def _typed(attributes: dict[str, str], default: str) -> dict[str, str]:
    """Ensure ``attributes`` carries a ``type`` key, appending ``default``."""
    attributes.setdefault("type", default)
    return attributes


def _parse_blocks(inner: str, page_index: int) -> tuple[SiteframeBlock, ...]:
    blocks: list[SiteframeBlock] = []
    for idx, match in enumerate(BLOCK_PATTERN.finditer(inner)):
        attributes = _typed(parse_attributes(match.group(1)), DEFAULT_BLOCK_TYPE)
        blocks.append(
            SiteframeBlock(
                id=f"block-{page_index}-{idx}",
                type=attributes["type"],
                attributes=attributes,
                content=match.group(2).strip(),
            )
        )
    return tuple(blocks)


def parse_payload(payload: str | None) -> SiteframeDocument:
    """Parse a payload string into a :class:`SiteframeDocument`.

    Parameters
    ----------
    payload : str or None
        Raw payload, canonical or backslash-escaped. ``None`` and ``""``
        produce an empty document.

    Returns
    -------
    SiteframeDocument
        Parts and pages in order of appearance with fresh synthetic ids
        (``part-N``, ``page-N``, ``block-P-N``). Parts without a ``type``
        attribute default to ``"custom"`` and blocks to ``"html"``; the default
        is written into ``attributes`` so ``type`` and ``attributes["type"]``
        always agree.
    """
    source = normalize_payload(payload)

    parts: list[SiteframePart] = []
    for idx, match in enumerate(PART_PATTERN.finditer(source)):
        attributes = _typed(parse_attributes(match.group(1)), DEFAULT_PART_TYPE)
        parts.append(
            SiteframePart(
                id=f"part-{idx}",
                type=attributes["type"],
                attributes=attributes,
                content=match.group(2).strip(),
            )
        )

    pages: list[SiteframePage] = []
    for idx, match in enumerate(PAGE_PATTERN.finditer(source)):
        pages.append(
            SiteframePage(
                id=f"page-{idx}",
                attributes=parse_attributes(match.group(1)),
                blocks=_parse_blocks(match.group(2), idx),
            )
        )

    return SiteframeDocument(parts=tuple(parts), pages=tuple(pages))


__all__ = [
    "ATTRIBUTE_NAME_PATTERN",
    "ATTRIBUTE_PATTERN",
    "BLOCK_PATTERN",
    "PAGE_PATTERN",
    "PART_PATTERN",
    "parse_attributes",
    "parse_payload",
]
