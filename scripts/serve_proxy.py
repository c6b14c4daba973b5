# Path: scripts/serve_proxy.py
# Purpose: Run the forwarding proxy with uvicorn.
# Layer: scripts.
# Details: Reads the credential and port from the environment (.env supported).

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import uvicorn
from dotenv import load_dotenv

from api import create_app
from config import AppSettings, configure_logging

logger = logging.getLogger("paletteai.proxy")


def main() -> None:
    """Start the proxy server."""

    load_dotenv()
    settings = AppSettings.from_env()
    configure_logging(settings.log_level)
    if not settings.server.token:
        logger.warning("No HF_TOKEN configured; proxied calls will be answered with 500.")

    logger.info("Server listening on http://%s:%d", settings.server.host, settings.server.port)
    uvicorn.run(create_app(settings.server), host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    main()
