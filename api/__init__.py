# Path: api/__init__.py
# Purpose: Package initializer for HTTP API layer.
# Layer: api.
# Details: Exposes the FastAPI application factory and the forwarding proxy.

from .app import create_app
from .proxy import ForwardingProxy

__all__ = ["ForwardingProxy", "create_app"]
