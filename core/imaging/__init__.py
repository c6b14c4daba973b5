# Path: core/imaging/__init__.py
# Purpose: Package initializer for image decoding and encoding helpers.
# Layer: core/imaging.
# Details: Exposes loaders, data URL codecs, and the filesystem scanner.

from .codecs import decode_data_url, encode_png, image_to_data_url, to_data_url
from .loader import ImageSource, decode_image, load_images
from .scanner import SUPPORTED_EXTENSIONS, ImageScanner

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "ImageScanner",
    "ImageSource",
    "decode_data_url",
    "decode_image",
    "encode_png",
    "image_to_data_url",
    "load_images",
    "to_data_url",
]
