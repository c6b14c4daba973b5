# Path: core/errors.py
# Purpose: Define the exception hierarchy shared by core services and the API layer.
# Layer: core.
# Details: Upstream failures carry the HTTP status and body so callers can present and retry them.

from __future__ import annotations

from typing import Optional


class PaletteAIError(Exception):
    """Base class for all PaletteAI errors."""


class ConfigurationError(PaletteAIError):
    """Raised when a required setting (credential, model id) is missing or invalid."""


class InferenceError(PaletteAIError):
    """A hosted inference call failed or returned an unusable payload."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class GenerationError(InferenceError):
    """Image generation failed; always fatal to the caller."""


class CollageError(PaletteAIError):
    """The reference collage could not be drawn or encoded."""


class StorageError(PaletteAIError):
    """Persisting or reading the style library failed."""


__all__ = [
    "CollageError",
    "ConfigurationError",
    "GenerationError",
    "InferenceError",
    "PaletteAIError",
    "StorageError",
]
