"""Unit tests for the siteframe normalizer, parser, and serializer.

These tests pin down the payload grammar shared with the site generator:
escaped payload detection, delimiter scanning, attribute handling, canonical
output layout, and the behaviour chosen for malformed nesting.

Usage
-----
Run ``pytest tests/test_siteframe_codec.py -v``. No fixtures beyond pytest's
built-ins are required.
"""

from __future__ import annotations

from textwrap import dedent

import pytest

from op_tools.siteframe import (
    SiteframeBlock,
    SiteframeDocument,
    SiteframePage,
    SiteframePart,
    SiteframeSerializationError,
    normalize_payload,
    parse_payload,
    serialize_document,
)
from op_tools.siteframe.normalizer import should_unescape
from op_tools.siteframe.parser import parse_attributes

CANONICAL_PAYLOAD = dedent(
    """
    <!--siteframe:part type="header" layout="wide"-->
    <header>{{ brand }}</header>
    <!--siteframe:/part-->

    <!--siteframe:part-->
    <footer>(c)</footer>
    <!--siteframe:/part-->

    <!--siteframe:page title="Home" slug="/" home="true"-->
        <!--siteframe:block type="html"-->
    <h1>Hi</h1>
        <!--siteframe:/block-->

        <!--siteframe:block type="text" tone="warm"-->
    Welcome
        <!--siteframe:/block-->
    <!--siteframe:/page-->

    <!--siteframe:page title="Bonus" slug="/bonus" template="landing"-->
        <!--siteframe:block-->
    <p>Bonus</p>
        <!--siteframe:/block-->
    <!--siteframe:/page-->
    """
).strip()


def _shape(doc: SiteframeDocument) -> list[object]:
    """Reduce a document to the fields that must survive a round trip."""
    return [
        [(part.type, part.attributes, part.content) for part in doc.parts],
        [
            (
                page.attributes,
                [(block.type, block.attributes, block.content) for block in page.blocks],
            )
            for page in doc.pages
        ],
    ]


@pytest.mark.parametrize(
    "payload",
    [
        "",
        "plain text without escapes",
        '<!--siteframe:part type="header"-->\nHi\n<!--siteframe:/part-->',
        CANONICAL_PAYLOAD,
    ],
)
def test_normalize_leaves_unescaped_payloads_alone(payload: str) -> None:
    """Strings without a backslash are returned unchanged."""
    assert normalize_payload(payload) == payload


def test_normalize_treats_none_as_empty() -> None:
    assert normalize_payload(None) == ""


def test_normalize_requires_a_siteframe_marker() -> None:
    """Backslashes alone do not trigger unescaping."""
    payload = 'C:\\temp\\new "folder"\\n'
    assert not should_unescape(payload)
    assert normalize_payload(payload) == payload


@pytest.mark.parametrize(
    "marker",
    ['\\"siteframe', "\\n<!--SITEFRAME", "\\/siteframe"],
)
def test_should_unescape_detects_markers_case_insensitively(marker: str) -> None:
    assert should_unescape(f"prefix {marker} suffix"), (
        f"expected marker {marker!r} to flag the payload as escaped"
    )


def test_normalize_unescapes_in_order() -> None:
    """``\\r\\n`` collapses to one newline and ``\\\\`` is handled last."""
    payload = 'a\\r\\nb\\n<!--siteframe:part type=\\"x\\"-->\\tc\\rd\\\\e'
    assert normalize_payload(payload) == 'a\nb\n<!--siteframe:part type="x"-->\tc\rd\\e'


@pytest.mark.parametrize(
    "payload",
    [
        CANONICAL_PAYLOAD,
        '\\n<!--siteframe:part type=\\"header\\"-->\\nHi\\n<!--siteframe:/part-->',
        "no markup at all",
    ],
)
def test_normalize_is_idempotent(payload: str) -> None:
    once = normalize_payload(payload)
    assert normalize_payload(once) == once


def test_parse_attributes_captures_values_verbatim() -> None:
    attributes = parse_attributes(' title="Fish &quot;n&quot; chips" slug="/"  junk ')
    assert attributes == {"title": "Fish &quot;n&quot; chips", "slug": "/"}


def test_parse_canonical_payload() -> None:
    doc = parse_payload(CANONICAL_PAYLOAD)

    assert [part.id for part in doc.parts] == ["part-0", "part-1"]
    assert doc.parts[0].type == "header"
    assert doc.parts[0].attributes == {"type": "header", "layout": "wide"}
    assert doc.parts[0].content == "<header>{{ brand }}</header>"
    assert doc.parts[1].type == "custom", "expected parts to default to 'custom'"
    assert doc.parts[1].attributes == {"type": "custom"}, (
        "expected the default type to be mirrored into attributes"
    )

    assert [page.id for page in doc.pages] == ["page-0", "page-1"]
    home, bonus = doc.pages
    assert home.is_home
    assert not bonus.is_home
    assert [block.id for block in home.blocks] == ["block-0-0", "block-0-1"]
    assert [block.type for block in home.blocks] == ["html", "text"]
    assert home.blocks[1].content == "Welcome"
    assert [block.id for block in bonus.blocks] == ["block-1-0"]
    assert bonus.blocks[0].type == "html", "expected blocks to default to 'html'"


def test_parse_is_case_insensitive_and_accepts_legacy_closers() -> None:
    payload = (
        '<!--SITEFRAME:PART type="nav"-->Menu<!--/siteframe:part-->\n'
        "<!--siteframe:page-->"
        '<!--siteframe:block type="html"-->A<!--/siteframe:block-->'
        "<!--/SITEFRAME:PAGE-->"
    )
    doc = parse_payload(payload)
    assert [(part.type, part.content) for part in doc.parts] == [("nav", "Menu")]
    assert len(doc.pages) == 1
    assert [block.content for block in doc.pages[0].blocks] == ["A"]


def test_parse_drops_unterminated_regions() -> None:
    payload = (
        '<!--siteframe:part type="header"-->never closed\n'
        '<!--siteframe:page title="Open"-->\n'
        '<!--siteframe:part type="footer"-->Bye<!--siteframe:/part-->'
    )
    doc = parse_payload(payload)
    assert [part.content for part in doc.parts] == [
        'never closed\n<!--siteframe:page title="Open"-->\n'
        '<!--siteframe:part type="footer"-->Bye'
    ], "expected the first opener to pair with the only closer"
    assert doc.pages == ()


def test_parse_blocks_outside_pages_are_ignored() -> None:
    doc = parse_payload('<!--siteframe:block type="html"-->X<!--siteframe:/block-->')
    assert doc.is_empty


def test_parse_part_inside_page_is_still_a_part() -> None:
    """Malformed nesting: the part is found and stays in the page text."""
    payload = (
        '<!--siteframe:page title="P"-->\n'
        '<!--siteframe:part type="promo"-->Deal<!--siteframe:/part-->\n'
        '<!--siteframe:block type="html"-->Body<!--siteframe:/block-->\n'
        "<!--siteframe:/page-->"
    )
    doc = parse_payload(payload)
    assert [part.type for part in doc.parts] == ["promo"]
    assert len(doc.pages) == 1
    assert [block.content for block in doc.pages[0].blocks] == ["Body"]


def test_parse_overlapping_pages_pair_first_opener_with_first_closer() -> None:
    payload = (
        '<!--siteframe:page title="A"-->'
        '<!--siteframe:block type="html"-->one<!--siteframe:/block-->'
        '<!--siteframe:page title="B"-->'
        '<!--siteframe:block type="html"-->two<!--siteframe:/block-->'
        "<!--siteframe:/page-->"
        "<!--siteframe:/page-->"
    )
    doc = parse_payload(payload)
    assert len(doc.pages) == 1, "expected overlapping pages to collapse into one"
    assert doc.pages[0].attributes == {"title": "A"}
    assert [block.content for block in doc.pages[0].blocks] == ["one", "two"]


def test_serialize_layout() -> None:
    doc = SiteframeDocument(
        parts=(
            SiteframePart(
                id="part-0", type="header", attributes={"type": "header"}, content="  H  "
            ),
        ),
        pages=(
            SiteframePage(
                id="page-0",
                attributes={"title": "Home", "home": "true"},
                blocks=(
                    SiteframeBlock(id="block-0-0", type="html", attributes={}, content="A"),
                    SiteframeBlock(
                        id="block-0-1", type="text", attributes={"tone": "warm"}, content="B"
                    ),
                ),
            ),
        ),
    )
    expected = dedent(
        """
        <!--siteframe:part type="header"-->
        H
        <!--siteframe:/part-->

        <!--siteframe:page title="Home" home="true"-->
            <!--siteframe:block type="html"-->
        A
            <!--siteframe:/block-->

            <!--siteframe:block tone="warm" type="text"-->
        B
            <!--siteframe:/block-->
        <!--siteframe:/page-->
        """
    ).strip()
    assert serialize_document(doc) == expected


def test_serialize_page_without_attributes_omits_space() -> None:
    doc = SiteframeDocument(pages=(SiteframePage(id="page-0", attributes={}),))
    assert serialize_document(doc) == "<!--siteframe:page-->\n\n<!--siteframe:/page-->"


def test_serialize_type_field_wins_over_attribute() -> None:
    part = SiteframePart(
        id="part-0", type="footer", attributes={"type": "header", "a": "1"}, content=""
    )
    rendered = serialize_document(SiteframeDocument(parts=(part,)))
    assert rendered.splitlines()[0] == '<!--siteframe:part type="footer" a="1"-->'


def test_serialize_escapes_quotes_without_decoding_on_parse() -> None:
    page = SiteframePage(id="page-0", attributes={"title": 'Say "hi"'})
    rendered = serialize_document(SiteframeDocument(pages=(page,)))
    assert 'title="Say &quot;hi&quot;"' in rendered
    reparsed = parse_payload(rendered)
    assert reparsed.pages[0].attributes["title"] == "Say &quot;hi&quot;", (
        "expected &quot; to stay encoded after parsing"
    )


def test_serialize_empty_document() -> None:
    assert serialize_document(SiteframeDocument.empty()) == ""
    assert parse_payload("") == SiteframeDocument(parts=(), pages=())


def test_serialize_rejects_non_string_values() -> None:
    part = SiteframePart(
        id="part-0", type="header", attributes={"width": 3}, content="x"  # type: ignore[dict-item]
    )
    with pytest.raises(SiteframeSerializationError, match="width"):
        serialize_document(SiteframeDocument(parts=(part,)))


def test_round_trip_preserves_structure() -> None:
    first = parse_payload(CANONICAL_PAYLOAD)
    second = parse_payload(serialize_document(first))
    assert _shape(second) == _shape(first)
    assert serialize_document(second) == serialize_document(first), (
        "expected canonical output to be stable"
    )


def test_round_trip_of_escaped_payload() -> None:
    escaped = CANONICAL_PAYLOAD.replace("\\", "\\\\").replace('"', '\\"').replace(
        "\n", "\\n"
    )
    assert parse_payload(escaped) == parse_payload(CANONICAL_PAYLOAD)


def test_parse_allows_angle_brackets_inside_quoted_values() -> None:
    payload = (
        '<!--siteframe:page title="Deals > 100" slug="/deals"-->\n'
        '<!--siteframe:block type="html" note="a<b>c"-->Body<!--siteframe:/block-->\n'
        "<!--siteframe:/page-->"
    )
    doc = parse_payload(payload)
    assert len(doc.pages) == 1, "expected '>' inside a quoted value to keep the page"
    assert doc.pages[0].attributes == {"title": "Deals > 100", "slug": "/deals"}
    block = doc.pages[0].blocks[0]
    assert (block.attributes["note"], block.content) == ("a<b>c", "Body")


@pytest.mark.parametrize("key", ["data-id", "two words", "a=b", ""])
def test_serialize_rejects_attribute_names_the_parser_cannot_read(key: str) -> None:
    page = SiteframePage(id="page-0", attributes={"title": "A", key: "7"})
    with pytest.raises(SiteframeSerializationError, match="Attribute name"):
        serialize_document(SiteframeDocument(pages=(page,)))


def test_entities_compare_by_value_but_are_unhashable() -> None:
    doc = parse_payload(CANONICAL_PAYLOAD)
    assert doc == parse_payload(CANONICAL_PAYLOAD)
    with pytest.raises(TypeError):
        hash(doc.parts[0])
