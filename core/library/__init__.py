# Path: core/library/__init__.py
# Purpose: Package initializer for style profile persistence.
# Layer: core/library.
# Details: Exposes the key-value store and the style library.

from .kv_store import JsonKeyValueStore
from .store import DEFAULT_STORAGE_KEY, StyleLibrary

__all__ = ["DEFAULT_STORAGE_KEY", "JsonKeyValueStore", "StyleLibrary"]
