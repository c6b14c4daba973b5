# Path: core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes dataclasses used across analysis, generation, and library layers.

from .domain import (
    ASPECT_RATIOS,
    RESOLUTIONS,
    AspectRatio,
    ChatMessage,
    GeneratedImage,
    Resolution,
    StyleAnalysisResult,
    StyleData,
    StyleProfile,
    StyleSnapshot,
)

__all__ = [
    "ASPECT_RATIOS",
    "RESOLUTIONS",
    "AspectRatio",
    "ChatMessage",
    "GeneratedImage",
    "Resolution",
    "StyleAnalysisResult",
    "StyleData",
    "StyleProfile",
    "StyleSnapshot",
]
