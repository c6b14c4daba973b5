# Path: core/analysis/orchestrator.py
# Purpose: Orchestrate style inference from reference images.
# Layer: core/analysis.
# Details: Sequences palette, collage, VLM, and embedding stages; only the palette stage is required.

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence

from PIL import Image

from config.settings import ModelSettings
from core.collage.builder import ReferenceCollage, create_reference_collage
from core.embedders.base import ImageEmbedder
from core.embedders.hosted_embedder import HostedImageEmbedder
from core.imaging.loader import ImageSource, load_images
from core.models.domain import StyleAnalysisResult
from core.palette.mood import infer_mood_keywords
from core.palette.quantizer import extract_dominant_palette
from core.providers.huggingface import HuggingFaceClient

from .merge import DeterministicStyle, merge_style_analysis
from .stages import StageResult, run_best_effort
from .vision import ExtractedStyle, VisionStyleExtractor

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]

PROGRESS_PREPROCESS = "Pre-processing: Normalizing inputs..."
PROGRESS_FEATURES = "Feature Extraction: Analyzing visual DNA..."
PROGRESS_EMBEDDING = "Vectorization: Creating style embedding..."

PALETTE_SIZE = 5


@dataclass
class StyleAnalysisReport:
    """Analysis result plus the outcome of every best-effort stage."""

    result: StyleAnalysisResult
    fallback: DeterministicStyle
    stages: Dict[str, StageResult] = field(default_factory=dict)


class StyleAnalyzer:
    """High-level service turning reference images into a style analysis."""

    def __init__(
        self,
        vision: Optional[VisionStyleExtractor] = None,
        embedder: Optional[ImageEmbedder] = None,
        palette_size: int = PALETTE_SIZE,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.vision = vision
        self.embedder = embedder
        self.palette_size = palette_size
        self.today = today

    @classmethod
    def from_settings(cls, client: HuggingFaceClient, models: ModelSettings) -> "StyleAnalyzer":
        """Resolve the vision and embedding model ids once for this analyzer."""

        return cls(
            vision=VisionStyleExtractor(client, models.vision),
            embedder=HostedImageEmbedder(client, models.embedding),
        )

    async def analyze(
        self, images: Sequence[Image.Image], on_progress: Optional[ProgressCallback] = None
    ) -> StyleAnalysisResult:
        report = await self.run(images, on_progress)
        return report.result

    async def analyze_files(
        self,
        sources: Sequence[ImageSource],
        on_progress: Optional[ProgressCallback] = None,
        show_progress: bool = False,
    ) -> StyleAnalysisResult:
        """Decode all sources concurrently, then analyze them."""

        images = await load_images(sources, show_progress=show_progress)
        return await self.analyze(images, on_progress)

    async def run(
        self, images: Sequence[Image.Image], on_progress: Optional[ProgressCallback] = None
    ) -> StyleAnalysisReport:
        """
        Execute every stage and merge the results.

        External calls:
        - core/analysis/vision.py::VisionStyleExtractor.extract - structured style description.
        - core/embedders/hosted_embedder.py::HostedImageEmbedder.embed_image - style embedding.
        """

        notify = on_progress or (lambda _status: None)

        notify(PROGRESS_PREPROCESS)
        palette = extract_dominant_palette(images, self.palette_size)
        fallback = DeterministicStyle(palette=palette, moods=infer_mood_keywords(palette))

        stages: Dict[str, StageResult] = {}
        stages["collage"] = await run_best_effort(
            "collage", lambda: asyncio.to_thread(create_reference_collage, list(images)), None
        )
        collage: Optional[ReferenceCollage] = stages["collage"].value

        notify(PROGRESS_FEATURES)
        if collage is not None and self.vision is not None:
            vision = self.vision
            stages["vision"] = await run_best_effort("vision", lambda: vision.extract(collage.data_url), ExtractedStyle())
        else:
            stages["vision"] = StageResult.fallback("vision", ExtractedStyle())

        notify(PROGRESS_EMBEDDING)
        embedding: Optional[List[float]] = None
        if collage is not None and self.embedder is not None:
            embedder = self.embedder
            stages["embedding"] = await run_best_effort(
                "embedding", lambda: embedder.embed_image(collage.png_bytes, collage.content_type), None
            )
            embedding = stages["embedding"].value
        else:
            stages["embedding"] = StageResult.fallback("embedding", None)

        result = merge_style_analysis(fallback, stages["vision"].value, self.today(), embedding)
        logger.info(
            "Analyzed %d image(s): palette=%s, fallbacks=%s",
            len(images),
            result.color_palette,
            [name for name, stage in stages.items() if stage.fallback_used] or "none",
        )
        return StyleAnalysisReport(result=result, fallback=fallback, stages=stages)
