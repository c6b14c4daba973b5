# Path: core/palette/colors.py
# Purpose: Hex color parsing, normalization, and formatting helpers.
# Layer: core/palette.
# Details: Shared by the quantizer, the mood heuristic, and VLM output validation.

from __future__ import annotations

import math
import re
from typing import Optional, Tuple

_HEX6 = re.compile(r"^[0-9a-fA-F]{6}$")
_HEX_PREFIX = re.compile(r"^0x", re.IGNORECASE)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, matching browser ``Math.round``."""

    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Format an RGB triple as lowercase ``#rrggbb``, clamping each channel to 0..255."""

    return "#" + "".join(f"{int(clamp(round_half_up(v), 0, 255)):02x}" for v in (r, g, b))


def normalize_hex(value: object) -> Optional[str]:
    """
    Validate an externally supplied color.

    An optional ``0x`` then ``#`` prefix is stripped; exactly six hex digits must remain.
    Returns the lowercase ``#rrggbb`` form, or None when the entry is unusable.
    """

    if not isinstance(value, str):
        return None
    digits = _HEX_PREFIX.sub("", value.strip(), count=1)
    if digits.startswith("#"):
        digits = digits[1:]
    if not _HEX6.match(digits):
        return None
    return f"#{digits.lower()}"


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    """Decode ``#rrggbb``; raises ValueError for anything :func:`normalize_hex` rejects."""

    normalized = normalize_hex(value)
    if normalized is None:
        raise ValueError(f"Invalid hex color: {value!r}")
    return int(normalized[1:3], 16), int(normalized[3:5], 16), int(normalized[5:7], 16)
