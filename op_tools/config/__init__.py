"""Load and validate op_tools configuration YAML.

This subpackage parses ``optools.yaml``, applies environment overrides and
defaults, and produces typed dataclasses (:class:`ToolsConfig`,
:class:`WebhookConfig`) that the webhook client and the CLI consume. The
primary entry point is :func:`load_tools_config`.

Examples
--------
>>> from pathlib import Path
>>> from op_tools.config import load_tools_config
>>> config = load_tools_config(Path("config/optools.yaml"))  # doctest: +SKIP
>>> config.webhooks.base_url  # doctest: +SKIP
'https://automation.example.invalid/'
"""

from .loader import WEBHOOK_BASE_ENV, load_tools_config, normalize_base_url
from .models import ToolsConfig, ToolsConfigError, WebhookConfig

__all__ = [
    "WEBHOOK_BASE_ENV",
    "ToolsConfig",
    "ToolsConfigError",
    "WebhookConfig",
    "load_tools_config",
    "normalize_base_url",
]
