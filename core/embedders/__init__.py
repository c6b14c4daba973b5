# Path: core/embedders/__init__.py
# Purpose: Package initializer for embedder implementations and interfaces.
# Layer: core/embedders.
# Details: Exposes base interface and the hosted implementation.

from .base import ImageEmbedder
from .hosted_embedder import HostedImageEmbedder

__all__ = ["ImageEmbedder", "HostedImageEmbedder"]
