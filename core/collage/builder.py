# Path: core/collage/builder.py
# Purpose: Composite several reference images into one tiled collage.
# Layer: core/collage.
# Details: Cells are square and filled with a centered "cover" crop; the result is kept as PNG bytes too.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from PIL import Image

from core.errors import CollageError
from core.imaging.codecs import encode_png, to_data_url
from core.palette.colors import round_half_up

DEFAULT_CELL_SIZE = 320
DEFAULT_MAX_IMAGES = 5


@dataclass(frozen=True)
class ReferenceCollage:
    """A composite image together with its lossless encoding."""

    image: Image.Image
    png_bytes: bytes
    content_type: str = "image/png"

    @property
    def data_url(self) -> str:
        return to_data_url(self.png_bytes, self.content_type)


def grid_shape(count: int) -> Tuple[int, int]:
    """Columns and rows for ``count`` tiles: as square as possible, filled row by row."""

    cols = math.ceil(math.sqrt(count))
    rows = math.ceil(count / cols)
    return cols, rows


def cover_crop_box(src_width: int, src_height: int, dst_width: int, dst_height: int) -> Tuple[int, int, int, int]:
    """Source box matching the destination aspect ratio, trimmed symmetrically from the longer side."""

    src_aspect = src_width / src_height
    dst_aspect = dst_width / dst_height
    if src_aspect > dst_aspect:
        crop_width = round_half_up(src_height * dst_aspect)
        left = round_half_up((src_width - crop_width) / 2)
        return left, 0, left + crop_width, src_height
    crop_height = round_half_up(src_width / dst_aspect)
    top = round_half_up((src_height - crop_height) / 2)
    return 0, top, src_width, top + crop_height


def _draw_cover(canvas: Image.Image, image: Image.Image, left: int, top: int, size: int) -> None:
    tile = image.convert("RGBA")
    tile = tile.crop(cover_crop_box(tile.width, tile.height, size, size)).resize((size, size), Image.Resampling.BILINEAR)
    canvas.paste(tile, (left, top), mask=tile)


def create_reference_collage(
    images: Sequence[Image.Image],
    cell_size: int = DEFAULT_CELL_SIZE,
    max_images: int = DEFAULT_MAX_IMAGES,
) -> ReferenceCollage:
    """
    Tile up to ``max_images`` leading images onto a black canvas.

    Images beyond ``max_images`` are ignored. Raises CollageError when there is nothing to draw,
    when drawing fails, or when the PNG encoding comes back empty.
    """

    selected = list(images[:max_images])
    if not selected:
        raise CollageError("No reference images to build a collage from.")
    if cell_size <= 0:
        raise CollageError(f"Cell size must be positive, got {cell_size}.")

    cols, rows = grid_shape(len(selected))
    try:
        canvas = Image.new("RGB", (cols * cell_size, rows * cell_size), (0, 0, 0))
        for index, image in enumerate(selected):
            col, row = index % cols, index // cols
            _draw_cover(canvas, image, col * cell_size, row * cell_size, cell_size)
        png_bytes = encode_png(canvas)
    except (OSError, ValueError, ZeroDivisionError, MemoryError) as exc:
        raise CollageError(f"Failed to draw reference collage: {exc}") from exc

    if not png_bytes:
        raise CollageError("Failed to create collage bytes.")
    return ReferenceCollage(image=canvas, png_bytes=png_bytes)
