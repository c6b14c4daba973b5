# Path: core/palette/mood.py
# Purpose: Derive qualitative mood tags from a color palette.
# Layer: core/palette.
# Details: Brightness and chroma of the averaged palette color select fixed keywords.

from __future__ import annotations

from typing import List, Sequence

from .colors import hex_to_rgb, normalize_hex

DEFAULT_MOODS = ("balanced", "clean", "modern")
DARK_THRESHOLD = 0.35
LIGHT_THRESHOLD = 0.7
VIBRANT_THRESHOLD = 0.35


def infer_mood_keywords(palette: Sequence[str]) -> List[str]:
    """Return exactly three mood keywords: brightness tag, chroma tag, then "stylized"."""

    rgb = [hex_to_rgb(color) for color in palette if normalize_hex(color) is not None]
    if not rgb:
        return list(DEFAULT_MOODS)

    r = sum(c[0] for c in rgb) / len(rgb)
    g = sum(c[1] for c in rgb) / len(rgb)
    b = sum(c[2] for c in rgb) / len(rgb)

    # Rec. 709 relative luminance weights.
    brightness = (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255
    chroma = (max(r, g, b) - min(r, g, b)) / 255

    if brightness < DARK_THRESHOLD:
        tone = "moody"
    elif brightness > LIGHT_THRESHOLD:
        tone = "airy"
    else:
        tone = "balanced"

    saturation = "vibrant" if chroma > VIBRANT_THRESHOLD else "muted"
    return [tone, saturation, "stylized"]
