# Path: core/analysis/vision.py
# Purpose: Ask a hosted vision-language model for a structured style description.
# Layer: core/analysis.
# Details: Builds the single-message request, parses the reply leniently, and drops invalid fields.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.palette.colors import normalize_hex
from core.providers.huggingface import HuggingFaceClient

from .json_extract import lenient_json_loads

MAX_MOOD_KEYWORDS = 6

STYLE_INSTRUCTION = (
    "Analyze the reference collage image and extract a concise style profile. "
    "Return ONLY a single valid JSON object with keys: "
    "artisticStyle (string), visualTechnique (string), colorPalette (array of 5 hex strings), "
    "moodKeywords (array of 3-5 strings), suggestedName (string), reasoning (string). "
    "No markdown, no extra text."
)


@dataclass(frozen=True)
class ExtractedStyle:
    """Fields the model supplied with the right type; None marks an absent or rejected field."""

    artistic_style: Optional[str] = None
    visual_technique: Optional[str] = None
    color_palette: Optional[List[str]] = None
    mood_keywords: Optional[List[str]] = None
    suggested_name: Optional[str] = None
    reasoning: Optional[str] = None


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def sanitize_extracted_style(parsed: Dict[str, Any]) -> ExtractedStyle:
    """Map the model's camelCase keys onto ExtractedStyle, filtering bad colors and moods."""

    raw_palette = parsed.get("colorPalette")
    palette = None
    if isinstance(raw_palette, list):
        palette = [color for color in (normalize_hex(entry) for entry in raw_palette) if color]

    raw_moods = parsed.get("moodKeywords")
    moods = None
    if isinstance(raw_moods, list):
        moods = [mood for mood in raw_moods if isinstance(mood, str)][:MAX_MOOD_KEYWORDS]

    return ExtractedStyle(
        artistic_style=_text(parsed.get("artisticStyle")),
        visual_technique=_text(parsed.get("visualTechnique")),
        color_palette=palette,
        mood_keywords=moods,
        suggested_name=_text(parsed.get("suggestedName")),
        reasoning=_text(parsed.get("reasoning")),
    )


class VisionStyleExtractor:
    """Style extraction through a chat-completions vision model."""

    def __init__(self, client: HuggingFaceClient, model_id: str, max_tokens: int = 450, temperature: float = 0.3) -> None:
        self.client = client
        self.model_id = model_id
        self.max_tokens = max_tokens
        self.temperature = temperature

    def build_messages(self, image_data_url: str) -> List[Dict[str, Any]]:
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": STYLE_INSTRUCTION},
                    {"type": "image_url", "image_url": {"url": image_data_url}},
                ],
            }
        ]

    async def extract(self, image_data_url: str) -> ExtractedStyle:
        """
        Describe the style of one (collage) image.

        External calls:
        - core/providers/huggingface.py::HuggingFaceClient.chat_completion - hosted VLM call.
        """

        content = await self.client.chat_completion(
            self.model_id,
            self.build_messages(image_data_url),
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            label="HF VLM",
        )
        return sanitize_extracted_style(lenient_json_loads(content))
