# Path: core/embedders/base.py
# Purpose: Define the ImageEmbedder interface for style embeddings.
# Layer: core/embedders.
# Details: Provides the abstract method and response coercion shared by embedder implementations.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class ImageEmbedder(ABC):
    """Abstract base class for embedders used by the style analyzer."""

    name: str

    @abstractmethod
    async def embed_image(self, data: bytes, content_type: str = "image/png") -> Optional[List[float]]:
        """Return an embedding for encoded image bytes, or None when no vector came back."""

    @staticmethod
    def _coerce_vector(payload: Any) -> Optional[List[float]]:
        """Unwrap one level of nesting and keep only numeric entries."""

        vector = payload[0] if isinstance(payload, list) and payload and isinstance(payload[0], list) else payload
        if not isinstance(vector, list):
            return None
        return [float(x) for x in vector if isinstance(x, (int, float)) and not isinstance(x, bool)]
