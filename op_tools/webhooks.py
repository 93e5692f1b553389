r"""Client for the automation webhooks that rebuild generated websites.

The site generator is driven by n8n workflows exposed as webhooks under a
common base URL. This module wraps the four calls the payload tooling needs:
pushing an edited siteframe payload (or the global fields) to the running
site, regenerating the content, redeploying from scratch, and disabling a
deployment. Request bodies mirror what the workflows expect; blank values are
sent as ``null``.

Example
-------
>>> from op_tools.webhooks import WebhookClient
>>> from op_tools.websites import WebsiteRecord
>>> client = WebhookClient(base_url="https://automation.example.invalid/")  # doctest: +SKIP
>>> record = WebsiteRecord(uuid="6f1c", domain="example.invalid")  # doctest: +SKIP
>>> client.push_siteframe(record, "<!--siteframe:page-->...")  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from http import HTTPStatus
from urllib.parse import urljoin, urlsplit

import requests

from ._constants import (
    DISABLE_WEBHOOK_PATH,
    REDEPLOY_WEBHOOK_PATH,
    REGENERATE_WEBHOOK_PATH,
    UPDATE_WEBHOOK_PATH,
)
from .config.loader import normalize_base_url
from .config.models import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from .siteframe.shortcodes import BUTTON_TOKENS
from .websites import MEDIA_FIELDS, REDEPLOY_REQUIRED_FIELDS

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config.models import WebhookConfig
    from .websites import WebsiteRecord

logger = logging.getLogger(__name__)

UpdateTarget = typ.Literal["siteframe", "global"]


class WebhookError(RuntimeError):
    """Raised when a webhook cannot be reached or answers with an error."""


class WebhookValidationError(ValueError):
    """Raised when a webhook request is refused before it is sent."""


@dc.dataclass(slots=True)
class WebhookReceipt:
    """Outcome of a successful webhook call.

    Attributes
    ----------
    url : str
        Endpoint that was called.
    status_code : int
        HTTP status returned by the workflow.
    text : str
        Response body as text; workflows usually answer with a short message.
    """

    url: str
    status_code: int
    text: str = ""


def _trim_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def _or_none(value: str | None) -> str | None:
    return value or None


class WebhookClient:
    """Thin wrapper around the site automation webhooks.

    The client does not retry; every call either returns a
    :class:`WebhookReceipt` or raises :class:`WebhookError`.
    """

    def __init__(
        self,
        *,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """Initialise the client.

        Parameters
        ----------
        base_url : str
            Root URL of the automation server; endpoint paths such as
            ``webhook/update-website`` are resolved beneath it.
        session : requests.Session, optional
            Preconfigured session to reuse connections. Defaults to a new
            session per client.
        timeout : float, optional
            Per-request timeout in seconds.
        user_agent : str, optional
            ``User-Agent`` header value.
        """
        self._base_url = normalize_base_url(base_url)
        self._session = session or requests.Session()
        self.timeout = timeout
        self._headers = {
            "Content-Type": "application/json",
            "User-Agent": user_agent,
        }

    @classmethod
    def from_config(
        cls, config: WebhookConfig, *, session: requests.Session | None = None
    ) -> WebhookClient:
        """Build a client from loaded :class:`WebhookConfig` settings."""
        return cls(
            base_url=config.base_url,
            session=session,
            timeout=config.timeout,
            user_agent=config.user_agent,
        )

    def endpoint(self, path: str) -> str:
        """Return the absolute URL for a webhook ``path``."""
        return urljoin(self._base_url, path)

    def _send(
        self, method: str, path: str, body: cabc.Mapping[str, typ.Any]
    ) -> WebhookReceipt:
        url = self.endpoint(path)
        host = urlsplit(url).netloc
        logger.info("Calling %s webhook %s on %s", method, path, host)
        try:
            response = self._session.request(
                method, url, json=dict(body), headers=self._headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.warning("Webhook %s on %s unreachable: %s", path, host, exc)
            msg = f"Failed to reach webhook '{path}' on {host}: {exc}"
            raise WebhookError(msg) from exc

        if response.status_code >= HTTPStatus.BAD_REQUEST:
            logger.warning(
                "Webhook %s on %s failed with status %s", path, host, response.status_code
            )
            msg = response.text or (
                f"Webhook '{path}' failed with status {response.status_code}"
            )
            raise WebhookError(msg)

        return WebhookReceipt(url=url, status_code=response.status_code, text=response.text)

    def _update_body(
        self, record: WebsiteRecord, *, target: UpdateTarget, code: str | None
    ) -> dict[str, typ.Any]:
        copy = record.button_copy()
        body: dict[str, typ.Any] = {
            "code": code if target == "siteframe" else None,
            "domain": _or_none(record.domain),
            "api_key": record.api_key,
            "brand": _or_none(record.brand),
            "pretty_link": _or_none(record.pretty_link),
        }
        body.update({name: _or_none(getattr(record, name)) for name in MEDIA_FIELDS})
        body.update(
            {field_name: _or_none(copy[token]) for token, field_name in BUTTON_TOKENS.items()}
        )
        body["target"] = target
        body["website_uuid"] = record.uuid
        return body

    def push_siteframe(self, record: WebsiteRecord, payload: str) -> WebhookReceipt:
        """Send an edited siteframe payload to the running site.

        ``payload`` is transmitted unmodified as ``code``; callers pass the
        serializer output so the site receives canonical markup.
        """
        body = self._update_body(record, target="siteframe", code=payload)
        return self._send("POST", UPDATE_WEBHOOK_PATH, body)

    def push_global(self, record: WebsiteRecord) -> WebhookReceipt:
        """Send the record's global branding fields without a payload."""
        body = self._update_body(record, target="global", code=None)
        return self._send("POST", UPDATE_WEBHOOK_PATH, body)

    def regenerate(
        self,
        record: WebsiteRecord,
        fields: cabc.Mapping[str, str] | None = None,
    ) -> dict[str, str | None]:
        """Ask the workflow to regenerate the site content.

        Parameters
        ----------
        record : WebsiteRecord
            Website being regenerated.
        fields : Mapping[str, str], optional
            Edited regeneration fields; defaults to
            :meth:`WebsiteRecord.regeneration_fields`.

        Returns
        -------
        dict[str, str | None]
            The trimmed field snapshot that was sent, ready to be written back
            to the registry.
        """
        values = dict(record.regeneration_fields())
        if fields:
            values.update(fields)
        snapshot = {key: _trim_or_none(value) for key, value in values.items()}
        snapshot["brand"] = _trim_or_none(record.brand)
        snapshot["pretty_link"] = _trim_or_none(record.pretty_link)
        body = {
            **snapshot,
            "domain": _trim_or_none(record.domain),
            "api_key": record.api_key,
            "website_uuid": record.uuid,
        }
        self._send("POST", REGENERATE_WEBHOOK_PATH, body)
        return snapshot

    def redeploy(
        self,
        record: WebsiteRecord,
        fields: cabc.Mapping[str, str] | None = None,
    ) -> WebhookReceipt:
        """Ask the workflow to rebuild the site from scratch.

        Raises
        ------
        WebhookValidationError
            If any of publisher, brand_full, brand_key, target_site or style
            is blank.
        """
        values = dict(record.redeploy_fields())
        if fields:
            values.update(fields)
        missing = [
            name
            for name in REDEPLOY_REQUIRED_FIELDS
            if not (values.get(name) or "").strip()
        ]
        if missing:
            msg = f"Fill in all required fields before redeploying: {', '.join(missing)}"
            raise WebhookValidationError(msg)
        body = {
            "domain": _trim_or_none(record.domain),
            "website_uuid": record.uuid,
            "api_key": record.api_key,
            "app_uuid": record.app_uuid,
            **{key: _trim_or_none(value) for key, value in values.items()},
        }
        return self._send("POST", REDEPLOY_WEBHOOK_PATH, body)

    def disable(self, record: WebsiteRecord) -> WebhookReceipt:
        """Remove the site's deployment from its server.

        Raises
        ------
        WebhookValidationError
            If the record has no ``app_uuid``.
        """
        if not record.app_uuid:
            msg = f"Website '{record.uuid}' has no app_uuid; it cannot be disabled."
            raise WebhookValidationError(msg)
        body = {"app_uuid": record.app_uuid, "domain": _trim_or_none(record.domain)}
        return self._send("DELETE", DISABLE_WEBHOOK_PATH, body)


__all__ = [
    "WebhookClient",
    "WebhookError",
    "WebhookReceipt",
    "WebhookValidationError",
]
