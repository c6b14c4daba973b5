# Path: core/palette/__init__.py
# Purpose: Package initializer for palette extraction and mood inference.
# Layer: core/palette.
# Details: Exposes the deterministic color pipeline used as the analysis fallback.

from .colors import clamp, hex_to_rgb, normalize_hex, rgb_to_hex, round_half_up
from .mood import DEFAULT_MOODS, infer_mood_keywords
from .quantizer import extract_dominant_palette

__all__ = [
    "DEFAULT_MOODS",
    "clamp",
    "extract_dominant_palette",
    "hex_to_rgb",
    "infer_mood_keywords",
    "normalize_hex",
    "rgb_to_hex",
    "round_half_up",
]
