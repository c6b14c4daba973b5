# Path: core/palette/quantizer.py
# Purpose: Extract dominant colors from reference images via coarse RGB histogram quantization.
# Layer: core/palette.
# Details: Images are downscaled, sparsely sampled, and binned into 16 levels per channel.

from __future__ import annotations

from typing import List, Sequence

import numpy as np
from PIL import Image

from .colors import rgb_to_hex, round_half_up

MAX_SIDE = 96
PIXEL_STRIDE = 3
MIN_ALPHA = 220
LEVEL_BITS = 4
BUCKET_COUNT = 1 << (3 * LEVEL_BITS)


def _downscale(image: Image.Image) -> Image.Image:
    """Shrink so the longer side is at most MAX_SIDE, keeping aspect ratio and at least 1px per side."""

    rgba = image.convert("RGBA")
    width, height = rgba.size
    scale = min(1.0, MAX_SIDE / max(width, height))
    target = (max(1, round_half_up(width * scale)), max(1, round_half_up(height * scale)))
    if target != rgba.size:
        rgba = rgba.resize(target, Image.Resampling.BILINEAR)
    return rgba


def _bucket_counts(image: Image.Image) -> np.ndarray:
    """Histogram of bucket keys for one image."""

    if image.width == 0 or image.height == 0:
        return np.zeros(BUCKET_COUNT, dtype=np.int64)

    pixels = np.asarray(_downscale(image), dtype=np.uint8).reshape(-1, 4)[::PIXEL_STRIDE]
    opaque = pixels[pixels[:, 3] >= MIN_ALPHA]
    levels = (opaque[:, :3] >> LEVEL_BITS).astype(np.int64)
    keys = (levels[:, 0] << (2 * LEVEL_BITS)) | (levels[:, 1] << LEVEL_BITS) | levels[:, 2]
    return np.bincount(keys, minlength=BUCKET_COUNT).astype(np.int64)


def bucket_center(key: int) -> str:
    """Hex color at the center of a quantization bucket."""

    mask = (1 << LEVEL_BITS) - 1
    step = 1 << LEVEL_BITS
    r = (key >> (2 * LEVEL_BITS)) & mask
    g = (key >> LEVEL_BITS) & mask
    b = key & mask
    return rgb_to_hex(r * step + step // 2, g * step + step // 2, b * step + step // 2)


def extract_dominant_palette(images: Sequence[Image.Image], count: int = 5) -> List[str]:
    """
    Return up to ``count`` dominant colors across all images, most frequent first.

    Ties in pixel count are broken by the lower bucket key so results are deterministic.
    Fewer than ``count`` colors are returned only when fewer distinct buckets were hit.
    """

    if count <= 0:
        return []

    histogram = np.zeros(BUCKET_COUNT, dtype=np.int64)
    for image in images:
        histogram += _bucket_counts(image)

    ranked = np.argsort(-histogram, kind="stable")[: max(count * 3, count)]

    colors: List[str] = []
    for key in ranked:
        if histogram[key] == 0:
            break
        color = bucket_center(int(key))
        if color not in colors:
            colors.append(color)
        if len(colors) >= count:
            break
    return colors
