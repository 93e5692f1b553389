"""Website registry records as consumed by the payload tooling.

The registry itself lives elsewhere; this module only mirrors the columns the
siteframe editor and the automation webhooks read, and derives the field sets
sent when a site is regenerated or redeployed.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .siteframe.shortcodes import BUTTON_TOKENS, extract_button_copy

MEDIA_FIELDS: tuple[str, ...] = (
    "logo",
    "banner",
    "banner_mobile",
    "image_1",
    "image_2",
    "image_3",
    "image_4",
)
REDEPLOY_REQUIRED_FIELDS: tuple[str, ...] = (
    "publisher",
    "brand_full",
    "brand_key",
    "target_site",
    "style",
)


@dc.dataclass(slots=True)
class WebsiteRecord:
    """Subset of a ``websites`` row.

    Attributes
    ----------
    uuid : str
        Registry identifier of the website.
    payload : str or None
        Siteframe payload text, possibly escaped.
    api_key : str or None
        Key the automation uses to talk to the generated site.
    app_uuid : str or None
        Deployment identifier; required to disable a site.
    """

    uuid: str
    domain: str | None = None
    brand: str | None = None
    payload: str | None = None
    api_key: str | None = None
    app_uuid: str | None = None
    pretty_link: str | None = None
    logo: str | None = None
    banner: str | None = None
    banner_mobile: str | None = None
    image_1: str | None = None
    image_2: str | None = None
    image_3: str | None = None
    image_4: str | None = None
    login_button_text: str | None = None
    register_button_text: str | None = None
    bonus_button_text: str | None = None
    publisher: str | None = None
    brand_full: str | None = None
    brand_key: str | None = None
    target_site: str | None = None
    style: str | None = None

    @classmethod
    def from_mapping(cls, data: typ.Mapping[str, typ.Any]) -> WebsiteRecord:
        """Build a record from a registry row, ignoring unknown columns."""
        try:
            uuid = str(data["uuid"])
        except KeyError as exc:
            msg = "Website record is missing 'uuid'"
            raise ValueError(msg) from exc
        known = {field.name for field in dc.fields(cls)} - {"uuid"}
        values = {key: _optional_text(data.get(key)) for key in known}
        return cls(uuid=uuid, **values)

    def button_copy(self) -> dict[str, str]:
        """Return button texts keyed by shortcode token.

        Empty record columns fall back to the copy found in the payload.
        """
        copy: dict[str, str] = {}
        for token, field_name in BUTTON_TOKENS.items():
            stored = getattr(self, field_name)
            copy[token] = stored or extract_button_copy(self.payload, token)
        return copy

    def regeneration_fields(self) -> dict[str, str]:
        """Return the editable field set used to regenerate the site."""
        fields = {
            "publisher": self.publisher or self.brand or "",
            "brand_full": self.brand_full or self.brand or "",
            "brand_key": self.brand_key or self.pretty_link or "",
            "target_site": self.target_site or self.domain or "",
            "style": self.style or "",
        }
        fields.update({name: getattr(self, name) or "" for name in MEDIA_FIELDS})
        copy = self.button_copy()
        fields.update(
            {field_name: copy[token] for token, field_name in BUTTON_TOKENS.items()}
        )
        return fields

    def redeploy_fields(self) -> dict[str, str]:
        """Return the editable field set used to redeploy the site."""
        fields = {
            "publisher": self.publisher or self.domain or "",
            "brand_full": self.brand_full or self.brand or "",
            "brand_key": self.brand_key or self.pretty_link or "",
            "target_site": self.target_site or self.domain or "",
            "style": self.style or "",
            "pretty_link": self.pretty_link or "",
        }
        fields.update({name: getattr(self, name) or "" for name in MEDIA_FIELDS})
        return fields


def _optional_text(value: object | None) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


__all__ = [
    "MEDIA_FIELDS",
    "REDEPLOY_REQUIRED_FIELDS",
    "WebsiteRecord",
]
