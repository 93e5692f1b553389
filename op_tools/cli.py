"""Cyclopts CLI entrypoint for working with siteframe payloads.

The ``optools`` console script defined here can unescape payloads exported
from JSON, rewrite them in canonical form, summarise their parts, pages and
blocks, and push a payload to a live site through the automation webhook.
Typical usage involves running ``optools format payload.txt --write`` after
hand-editing a payload and ``optools push payload.txt --website-uuid ...`` to
publish it.

Examples
--------
Print a summary of a payload file:

>>> from op_tools.cli import app
>>> app(["inspect", "payload.txt"])  # doctest: +SKIP

Canonicalise a payload in place:

>>> app(["format", "payload.txt", "--write"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_tools_config
from .siteframe import normalize_payload, parse_payload, serialize_document
from .webhooks import WebhookClient
from .websites import WebsiteRecord

if typ.TYPE_CHECKING:
    from .siteframe import SiteframeDocument

DEFAULT_CONFIG = Path("config/optools.yaml")

app = App(name="optools", config=cyclopts.config.Env("OPTOOLS_", command=False))  # type: ignore[unknown-argument]


def _read_payload(path: Path) -> str:
    if not path.exists():
        msg = f"Payload file '{path}' not found."
        raise FileNotFoundError(msg)
    return path.read_text(encoding="utf-8")


def describe_document(doc: SiteframeDocument) -> list[str]:
    """Return one summary line per part, page, and block of ``doc``."""
    lines: list[str] = []
    for part in doc.parts:
        lines.append(f"{part.id} {part.type}")
    for page in doc.pages:
        slug = page.attributes.get("slug", "")
        title = page.attributes.get("title", "")
        label = f'{page.id} {slug} "{title}"'
        if page.is_home:
            label = f"{label} [home]"
        lines.append(label)
        lines.extend(f"  {block.id} {block.type}" for block in page.blocks)
    return lines


@app.command(help="Print a payload with JSON-style escaping removed.")
def normalize(path: Path) -> None:
    """Print the normalized form of the payload stored in ``path``."""
    print(normalize_payload(_read_payload(path)))


@app.command(name="format", help="Rewrite a payload in canonical siteframe form.")
def format_payload(
    path: Path,
    *,
    write: typ.Annotated[
        bool, Parameter(help="Rewrite the file instead of printing")
    ] = False,
) -> None:
    """Parse and re-serialize the payload stored in ``path``.

    Parameters
    ----------
    path : Path
        Payload file, canonical or escaped.
    write : bool, optional
        When True the canonical text replaces the file contents; otherwise it
        is printed to stdout.
    """
    canonical = serialize_document(parse_payload(_read_payload(path)))
    if write:
        path.write_text(f"{canonical}\n", encoding="utf-8")
        print(f"wrote {path}")
    else:
        print(canonical)


@app.command(name="inspect", help="Summarise the parts, pages, and blocks of a payload.")
def inspect_payload(path: Path) -> None:
    """Print a one-line summary per entity found in ``path``."""
    doc = parse_payload(_read_payload(path))
    if doc.is_empty:
        print("no siteframe parts or pages found")
        return
    for line in describe_document(doc):
        print(line)


@app.command(help="Push a payload to a live site through the update webhook.")
def push(
    path: Path,
    *,
    website_uuid: typ.Annotated[str, Parameter(help="Registry uuid of the website")],
    domain: typ.Annotated[str | None, Parameter(help="Website domain")] = None,
    api_key: typ.Annotated[
        str | None, Parameter(help="API key of the generated site")
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to tools config", env_var="OPTOOLS_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Canonicalise the payload in ``path`` and send it to the website.

    Raises
    ------
    WebhookError
        If the automation server rejects the payload or cannot be reached.
    """
    tools_config = load_tools_config(config)
    canonical = serialize_document(parse_payload(_read_payload(path)))
    record = WebsiteRecord(
        uuid=website_uuid, domain=domain, api_key=api_key, payload=canonical
    )
    client = WebhookClient.from_config(tools_config.webhooks)
    receipt = client.push_siteframe(record, canonical)
    print(f"pushed {path} to {receipt.url} ({receipt.status_code})")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``optools`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
