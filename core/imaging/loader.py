# Path: core/imaging/loader.py
# Purpose: Decode reference images from paths, raw bytes, or data URLs.
# Layer: core/imaging.
# Details: Multiple sources are decoded concurrently in worker threads and joined before use.

from __future__ import annotations

import asyncio
import io
from pathlib import Path
from typing import List, Sequence, Union

from PIL import Image
from tqdm.asyncio import tqdm

from .codecs import decode_data_url

ImageSource = Union[str, Path, bytes, bytearray]


def decode_image(source: ImageSource) -> Image.Image:
    """Fully decode one image into memory; raises OSError or ValueError on bad input."""

    if isinstance(source, (bytes, bytearray)):
        stream: Union[io.BytesIO, Path] = io.BytesIO(bytes(source))
    elif isinstance(source, str) and source.startswith("data:"):
        stream = io.BytesIO(decode_data_url(source)[0])
    else:
        stream = Path(source)

    with Image.open(stream) as image:
        image.load()
        return image.copy()


async def load_images(sources: Sequence[ImageSource], show_progress: bool = False) -> List[Image.Image]:
    """
    Decode all sources concurrently, preserving input order.

    External calls:
    - tqdm.asyncio.tqdm.gather - fan-out/join with an optional progress bar.
    """

    tasks = [asyncio.to_thread(decode_image, source) for source in sources]
    if not tasks:
        return []
    return list(await tqdm.gather(*tasks, desc="Decoding images", unit="img", disable=not show_progress))
