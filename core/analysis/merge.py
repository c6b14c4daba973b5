# Path: core/analysis/merge.py
# Purpose: Combine model-supplied style fields with deterministic fallbacks.
# Layer: core/analysis.
# Details: A field from the model wins only when present and non-empty.

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, TypeVar

from core.models.domain import StyleAnalysisResult

from .vision import ExtractedStyle

DEFAULT_ARTISTIC_STYLE = "Custom"
DEFAULT_VISUAL_TECHNIQUE = "Reference-guided"
DEFAULT_REASONING = "Extracted a dominant palette and inferred basic mood from reference images."

T = TypeVar("T")


@dataclass(frozen=True)
class DeterministicStyle:
    """Locally computed palette and moods used when the model says nothing useful."""

    palette: List[str]
    moods: List[str]


def fallback_style_name(today: date) -> str:
    return f"Custom Style {today.isoformat()}"


def _text_or(value: Optional[str], default: str) -> str:
    # Whitespace-only answers count as missing.
    return value if value is not None and value.strip() else default


def _list_or(value: Optional[Sequence[T]], default: Sequence[T]) -> List[T]:
    return list(value) if value else list(default)


def merge_style_analysis(
    fallback: DeterministicStyle,
    extracted: ExtractedStyle,
    today: date,
    embedding: Optional[List[float]] = None,
) -> StyleAnalysisResult:
    """Build the final analysis from the extracted fields, falling back field by field."""

    return StyleAnalysisResult(
        artistic_style=_text_or(extracted.artistic_style, DEFAULT_ARTISTIC_STYLE),
        visual_technique=_text_or(extracted.visual_technique, DEFAULT_VISUAL_TECHNIQUE),
        color_palette=_list_or(extracted.color_palette, fallback.palette),
        mood_keywords=_list_or(extracted.mood_keywords, fallback.moods),
        suggested_name=_text_or(extracted.suggested_name, fallback_style_name(today)),
        reasoning=_text_or(extracted.reasoning, DEFAULT_REASONING),
        embedding=embedding,
    )
