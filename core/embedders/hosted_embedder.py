# Path: core/embedders/hosted_embedder.py
# Purpose: Embed images through a hosted feature-extraction model.
# Layer: core/embedders.
# Details: Sends raw image bytes to the provider and normalizes the returned vector shape.

from __future__ import annotations

from typing import List, Optional

from core.providers.huggingface import HuggingFaceClient

from .base import ImageEmbedder


class HostedImageEmbedder(ImageEmbedder):
    """Feature-extraction embedder backed by the inference provider."""

    def __init__(self, client: HuggingFaceClient, model_id: str) -> None:
        self.client = client
        self.model_id = model_id
        self.name = f"hosted:{model_id}"

    async def embed_image(self, data: bytes, content_type: str = "image/png") -> Optional[List[float]]:
        """
        Post the image bytes and coerce the response into a flat vector.

        External calls:
        - core/providers/huggingface.py::HuggingFaceClient.feature_extraction - hosted embedding call.
        """

        payload = await self.client.feature_extraction(self.model_id, data, content_type or "image/png")
        return self._coerce_vector(payload)
