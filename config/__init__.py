# Path: config/__init__.py
# Purpose: Package initializer for configuration module.
# Layer: config.
# Details: Exposes settings models and logging setup for application-wide configuration.

from .log_setup import configure_logging
from .settings import AppSettings, ModelSettings, ProviderSettings, ServerSettings, StorageSettings

__all__ = ["AppSettings", "ModelSettings", "ProviderSettings", "ServerSettings", "StorageSettings", "configure_logging"]
