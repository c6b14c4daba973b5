# Path: core/generation/gateway.py
# Purpose: Build image-generation requests and return displayable results.
# Layer: core/generation.
# Details: Maps aspect ratio and resolution tiers to pixel sizes and decodes the binary reply to a data URL.

from __future__ import annotations

import logging
from typing import Dict, Sequence, Tuple

from core.errors import GenerationError, InferenceError
from core.imaging.codecs import to_data_url
from core.palette.colors import round_half_up
from core.providers.huggingface import HuggingFaceClient

logger = logging.getLogger(__name__)

BASE_SIZES: Dict[str, int] = {"1K": 1024, "2K": 1536, "4K": 1536}
ACCESS_HINT = (
    "(Check model access on Hugging Face or set HF_FLUX_MODEL to an accessible model "
    "such as black-forest-labs/FLUX.1-dev.)"
)


def aspect_to_size(aspect_ratio: str, resolution: str) -> Tuple[int, int]:
    """Return (width, height) in pixels for an aspect ratio and resolution tier."""

    try:
        base = BASE_SIZES[resolution]
    except KeyError:
        raise ValueError(f"Unknown resolution: {resolution}") from None

    if aspect_ratio == "1:1":
        return base, base
    if aspect_ratio == "3:4":
        return round_half_up(base * 3 / 4), base
    if aspect_ratio == "4:3":
        return base, round_half_up(base * 3 / 4)
    if aspect_ratio == "16:9":
        return base, round_half_up(base * 9 / 16)
    raise ValueError(f"Unknown aspect ratio: {aspect_ratio}")


class GenerationGateway:
    """Send fused prompts to the hosted image model."""

    def __init__(self, client: HuggingFaceClient, model_id: str) -> None:
        self.client = client
        self.model_id = model_id

    async def generate_from_graph(
        self,
        prompt: str,
        fused_prompt: str,
        reference_images: Sequence[str] = (),
        input_images: Sequence[str] = (),
        aspect_ratio: str = "1:1",
        resolution: str = "1K",
    ) -> str:
        """
        Render ``fused_prompt`` and return the image as a data URL.

        The hosted text-to-image endpoint accepts only a prompt and a size, so ``prompt``,
        ``reference_images`` and ``input_images`` are accepted for call-site symmetry but not sent.

        External calls:
        - core/providers/huggingface.py::HuggingFaceClient.text_to_image - hosted diffusion call.
        """

        width, height = aspect_to_size(aspect_ratio, resolution)
        logger.info(
            "Generating %dx%d with %s (%d reference, %d input image(s))",
            width,
            height,
            self.model_id,
            len(reference_images),
            len(input_images),
        )
        try:
            data, content_type = await self.client.text_to_image(self.model_id, fused_prompt, width, height)
        except InferenceError as exc:
            message = str(exc)
            if exc.status_code in (403, 404):
                message = f"{message} {ACCESS_HINT}"
            raise GenerationError(message, status_code=exc.status_code, body=exc.body) from exc

        if not data:
            raise GenerationError("HF Inference returned an empty image.")
        return to_data_url(data, content_type)
