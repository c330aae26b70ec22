"""Logging configuration for the stdio MCP server.

stdout carries the MCP protocol stream, so log records go to stderr.
"""

from __future__ import annotations

import logging
import os
import sys

from mastertour_mcp.constants import ENV_LOG_LEVEL

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    resolved = (level or os.environ.get(ENV_LOG_LEVEL, "") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )
    # aiohttp access noise is not useful for a client-only process
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
