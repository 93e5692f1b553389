"""Typed dataclasses describing op_tools configuration."""

from __future__ import annotations

import dataclasses as dc

DEFAULT_TIMEOUT = 15.0
DEFAULT_USER_AGENT = "op-tools/0.1"


class ToolsConfigError(ValueError):
    """Raised when the tools configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class WebhookConfig:
    """Connection settings for the automation webhooks.

    Attributes
    ----------
    base_url : str
        Root URL the ``webhook/...`` endpoint paths are resolved against;
        always ends with ``/``.
    timeout : float
        Per-request timeout in seconds.
    user_agent : str
        Value sent in the ``User-Agent`` header.
    """

    base_url: str
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


@dc.dataclass(slots=True)
class ToolsConfig:
    """Aggregate configuration loaded from ``optools.yaml``."""

    webhooks: WebhookConfig
