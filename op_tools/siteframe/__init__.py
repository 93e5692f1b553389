r"""Codec for siteframe payloads stored on website records.

This subpackage turns the delimiter-based payload text into
:class:`SiteframeDocument` values, applies field-level edits without mutating
the original document, and renders documents back to the exact markup the
site generator consumes.

Examples
--------
>>> from op_tools.siteframe import parse_payload, serialize_document
>>> doc = parse_payload('<!--siteframe:part type="header"-->\nHi\n<!--siteframe:/part-->')
>>> serialize_document(doc).splitlines()[0]
'<!--siteframe:part type="header"-->'
"""

from .editing import (
    set_block_attribute,
    set_block_content,
    set_page_attribute,
    set_page_home,
    set_part_attribute,
    set_part_content,
    set_part_type,
)
from .editor import SiteframeEditor
from .models import (
    SiteframeBlock,
    SiteframeDocument,
    SiteframePage,
    SiteframePart,
    SiteframeSerializationError,
)
from .normalizer import normalize_payload
from .parser import parse_payload
from .serializer import serialize_document
from .shortcodes import BUTTON_TOKENS, extract_button_copy

__all__ = [
    "BUTTON_TOKENS",
    "SiteframeBlock",
    "SiteframeDocument",
    "SiteframeEditor",
    "SiteframePage",
    "SiteframePart",
    "SiteframeSerializationError",
    "extract_button_copy",
    "normalize_payload",
    "parse_payload",
    "serialize_document",
    "set_block_attribute",
    "set_block_content",
    "set_page_attribute",
    "set_page_home",
    "set_part_attribute",
    "set_part_content",
    "set_part_type",
]
