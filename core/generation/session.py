# Path: core/generation/session.py
# Purpose: Drive styled generation for one active style profile.
# Layer: core/generation.
# Details: Refines and fuses prompts, renders through the gateway, and records GeneratedImage results.

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import List, Optional, Sequence

from core.models.domain import GeneratedImage, StyleProfile, new_id, now_ms
from core.prompts.fusion import fuse_prompt
from core.prompts.refiners import GenerationMode, augment_prompt

from .gateway import GenerationGateway

RAW_STYLE_ID = "raw"
RAW_FUSED_PROMPT = "Raw Generation"
DEFAULT_INTENSITY = 0.8
DEFAULT_VARIATIONS = 3


@dataclass(frozen=True)
class GenerationOutcome:
    """A styled render and, when requested, an unstyled render of the same prompt."""

    image: GeneratedImage
    comparison: Optional[GeneratedImage] = None


class GenerationSession:
    """
    Generation workflow bound to a single style profile.

    Input images attached for editing are chained: after an edit, the result becomes the only
    attachment so the next call refines it further.
    """

    def __init__(
        self,
        gateway: GenerationGateway,
        profile: StyleProfile,
        aspect_ratio: str = "1:1",
        resolution: str = "1K",
    ) -> None:
        self.gateway = gateway
        self.profile = profile
        self.aspect_ratio = aspect_ratio
        self.resolution = resolution
        self.attachments: List[str] = []
        self.history: List[GeneratedImage] = []

    def _record(self, url: str, prompt: str, fused_prompt: str, style_id: str) -> GeneratedImage:
        return GeneratedImage(
            id=new_id(),
            url=url,
            prompt=prompt,
            fused_prompt=fused_prompt,
            style_id=style_id,
            timestamp=now_ms(),
            aspect_ratio=self.aspect_ratio,
            resolution=self.resolution,
        )

    async def generate(
        self,
        prompt: str,
        intensity: float = DEFAULT_INTENSITY,
        negative_prompt: str = "",
        mode: GenerationMode = "CREATE",
        creativity: float = 0.5,
        compare: bool = False,
    ) -> GenerationOutcome:
        """
        Render ``prompt`` in the profile's style.

        External calls:
        - core/generation/gateway.py::GenerationGateway.generate_from_graph - styled and raw renders.
        """

        if not prompt.strip():
            raise ValueError("Prompt must not be empty.")

        augmented = augment_prompt(prompt, negative_prompt, mode, creativity)
        fused = fuse_prompt(augmented, self.profile, intensity)
        attachments = list(self.attachments)

        url = await self.gateway.generate_from_graph(
            prompt, fused, self.profile.reference_images, attachments, self.aspect_ratio, self.resolution
        )
        image = self._record(url, prompt, fused, self.profile.id)
        self.history.insert(0, image)

        comparison = None
        if compare:
            raw_url = await self.gateway.generate_from_graph(
                prompt, prompt, [], attachments, self.aspect_ratio, self.resolution
            )
            comparison = self._record(raw_url, prompt, RAW_FUSED_PROMPT, RAW_STYLE_ID)

        if attachments:
            self.attachments = [url]
        return GenerationOutcome(image=image, comparison=comparison)

    async def variations(self, image: GeneratedImage, count: int = DEFAULT_VARIATIONS) -> List[GeneratedImage]:
        """Re-render an existing result ``count`` times concurrently with the same fused prompt."""

        async def render() -> GeneratedImage:
            url = await self.gateway.generate_from_graph(
                f"{image.prompt} (variation)",
                image.fused_prompt,
                self.profile.reference_images,
                self.attachments,
                image.aspect_ratio,
                image.resolution,
            )
            return GeneratedImage(
                id=new_id(),
                url=url,
                prompt=image.prompt,
                fused_prompt=image.fused_prompt,
                style_id=self.profile.id,
                timestamp=now_ms(),
                aspect_ratio=image.aspect_ratio,
                resolution=image.resolution,
            )

        return list(await asyncio.gather(*(render() for _ in range(count))))

    def attach(self, images: Sequence[str]) -> None:
        self.attachments.extend(images)

    def clear_attachments(self) -> None:
        self.attachments = []
