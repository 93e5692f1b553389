"""Read call-to-action button copy embedded in siteframe payloads.

Generated sites render their login, register, and bonus buttons from
shortcodes such as ``[login_btn text="Sign in"]`` or
``[bonus_btn]Claim bonus[/bonus_btn]``. When a website record has no explicit
button text the dashboard falls back to the copy found in its payload.
"""

from __future__ import annotations

import re

BUTTON_TOKENS: dict[str, str] = {
    "login_btn": "login_button_text",
    "register_btn": "register_button_text",
    "bonus_btn": "bonus_button_text",
}


def extract_button_copy(payload: str | None, token: str) -> str:
    """Return the button copy for ``token`` or ``""`` when none is present.

    The attribute form (``text``, ``label`` or ``copy``) is preferred over the
    enclosing form; matching is case-insensitive.

    Examples
    --------
    >>> extract_button_copy('[login_btn style="x" text="Sign in"]', "login_btn")
    'Sign in'
    >>> extract_button_copy("[bonus_btn] Claim [/bonus_btn]", "bonus_btn")
    'Claim'
    """
    if not payload:
        return ""
    name = re.escape(token)
    attribute_match = re.search(
        rf'\[{name}[^\]]*(?:text|label|copy)="([^"]+)"[^\]]*\]', payload, re.IGNORECASE
    )
    if attribute_match:
        return attribute_match.group(1)
    block_match = re.search(
        rf"\[{name}\](.*?)\[/{name}\]", payload, re.IGNORECASE | re.DOTALL
    )
    if block_match:
        return block_match.group(1).strip()
    return ""


__all__ = ["BUTTON_TOKENS", "extract_button_copy"]
