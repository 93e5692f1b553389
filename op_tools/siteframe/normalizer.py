r"""Undo backslash escaping applied to siteframe payloads by JSON transports.

Payloads copied out of webhook logs or JSON exports arrive with ``\n`` and
``\"`` sequences instead of real newlines and quotes. The normalizer detects
that shape and reverses it so the parser sees plain markup.

Example
-------
>>> from op_tools.siteframe.normalizer import normalize_payload
>>> normalize_payload('Hi\\n<!--siteframe:part type=\\"header\\"-->')
'Hi\n<!--siteframe:part type="header"-->'
"""

from __future__ import annotations

ESCAPE_MARKERS: tuple[str, ...] = (
    '\\"siteframe',
    "\\n<!--siteframe",
    "\\/siteframe",
)

# Multi-character sequences go first and the escaped backslash goes last.
_UNESCAPE_SEQUENCE: tuple[tuple[str, str], ...] = (
    ("\\r\\n", "\n"),
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\t", "\t"),
    ('\\"', '"'),
    ("\\\\", "\\"),
)


def should_unescape(value: str) -> bool:
    """Return True when ``value`` looks like an escaped siteframe payload."""
    if not value or "\\" not in value:
        return False
    lowered = value.lower()
    return any(marker in lowered for marker in ESCAPE_MARKERS)


def _unescape(value: str) -> str:
    for escaped, replacement in _UNESCAPE_SEQUENCE:
        value = value.replace(escaped, replacement)
    return value


def normalize_payload(raw: str | None) -> str:
    """Return plain siteframe markup for ``raw``.

    Parameters
    ----------
    raw : str or None
        Payload text as stored in the website registry. ``None`` is treated
        as an empty payload.

    Returns
    -------
    str
        The unescaped payload when an escaped encoding is detected, otherwise
        ``raw`` unchanged.
    """
    if not raw:
        return ""
    return _unescape(raw) if should_unescape(raw) else raw


__all__ = ["ESCAPE_MARKERS", "normalize_payload", "should_unescape"]
