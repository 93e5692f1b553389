"""Load tools configuration YAML into typed dataclasses."""

from __future__ import annotations

import os
import typing as typ
from urllib.parse import urlsplit

from ruamel.yaml import YAML

from .models import (
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ToolsConfig,
    ToolsConfigError,
    WebhookConfig,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

WEBHOOK_BASE_ENV = "OPTOOLS_N8N_WEBHOOK_BASE"


def load_tools_config(path: Path) -> ToolsConfig:
    """Load the YAML configuration describing external endpoints.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/optools.yaml``).

    Returns
    -------
    ToolsConfig
        Parsed configuration. ``OPTOOLS_N8N_WEBHOOK_BASE`` in the environment
        overrides ``webhooks.base_url`` from the file.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ToolsConfigError
        If the webhook base URL is missing or invalid, or the timeout is not
        a positive number.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)

    webhooks_raw = loaded.get("webhooks") or {}
    if not isinstance(webhooks_raw, dict):
        msg = "'webhooks' must be a mapping."
        raise ToolsConfigError(msg)

    base_url = os.getenv(WEBHOOK_BASE_ENV) or webhooks_raw.get("base_url")
    return ToolsConfig(
        webhooks=WebhookConfig(
            base_url=normalize_base_url(base_url),
            timeout=_parse_timeout(webhooks_raw.get("timeout", DEFAULT_TIMEOUT)),
            user_agent=str(webhooks_raw.get("user_agent") or DEFAULT_USER_AGENT),
        )
    )


def normalize_base_url(value: object | None) -> str:
    """Return ``value`` as an absolute http(s) URL ending with ``/``."""
    text = str(value).strip() if value is not None else ""
    if not text:
        msg = "Missing 'webhooks.base_url' in configuration."
        raise ToolsConfigError(msg)
    parts = urlsplit(text)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        msg = f"Invalid webhook base URL: {text!r}"
        raise ToolsConfigError(msg)
    return text if text.endswith("/") else f"{text}/"


def _parse_timeout(value: typ.Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        msg = f"Invalid webhook timeout: {value!r}"
        raise ToolsConfigError(msg) from exc
    if timeout <= 0:
        msg = f"Webhook timeout must be positive, got {timeout}"
        raise ToolsConfigError(msg)
    return timeout


__all__ = ["WEBHOOK_BASE_ENV", "load_tools_config", "normalize_base_url"]
