# Path: config/log_setup.py
# Purpose: Configure process-wide logging for CLIs and the proxy server.
# Layer: config.
# Details: Thin wrapper over logging.basicConfig driven by AppSettings.log_level.

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler at the requested level; unknown names fall back to INFO."""

    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    # httpx logs one INFO line per request.
    logging.getLogger("httpx").setLevel(max(resolved, logging.WARNING))
