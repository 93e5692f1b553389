"""Tooling for the siteframe payloads behind the OP Tools dashboard.

This package parses, edits, and re-serializes the siteframe payload stored on
each website record, and exposes the ``optools`` CLI to inspect, canonicalise,
and push payloads to generated sites.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from op_tools import main
>>> callable(main)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
