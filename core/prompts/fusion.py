# Path: core/prompts/fusion.py
# Purpose: Merge a user prompt with style attributes at a given intensity.
# Layer: core/prompts.
# Details: Appends a labelled style-guidance line; negligible intensities leave the prompt untouched.

from __future__ import annotations

from typing import Any, List, Mapping, Sequence, Tuple

from core.palette.colors import clamp, round_half_up

MIN_INTENSITY = 0.15
STRICT_INTENSITY = 0.8
BALANCED_INTENSITY = 0.4
MAX_PALETTE_HINT = 5


def _first(source: Any, *names: str) -> Any:
    for name in names:
        value = source.get(name) if isinstance(source, Mapping) else getattr(source, name, None)
        if value:
            return value
    return None


def _style_attributes(style: Any) -> Tuple[Sequence[str], Sequence[str], str]:
    """Palette, moods, and technique from a profile, an analysis result, or a plain mapping."""

    palette = _first(style, "palette", "color_palette") or ()
    moods = _first(style, "moods", "mood_keywords") or ()
    technique = _first(style, "visual_technique") or ""
    return list(palette), list(moods), str(technique)


def strength_label(intensity: float) -> str:
    if intensity >= STRICT_INTENSITY:
        return "strict"
    if intensity >= BALANCED_INTENSITY:
        return "balanced"
    return "subtle"


def style_hint(palette: Sequence[str], moods: Sequence[str], technique: str) -> str:
    parts: List[str] = []
    if technique:
        parts.append(f"Technique: {technique}.")
    if moods:
        parts.append(f"Mood: {', '.join(moods)}.")
    if palette:
        parts.append(f"Palette: {', '.join(palette[:MAX_PALETTE_HINT])}.")
    return " ".join(parts)


def fuse_prompt(user_prompt: str, style: Any, intensity: float) -> str:
    """
    Return ``user_prompt`` followed by a style-guidance line.

    Intensity is clamped to [0, 1]; below 0.15 the prompt is returned unchanged.
    """

    level = clamp(float(intensity), 0.0, 1.0)
    if level < MIN_INTENSITY:
        return user_prompt

    palette, moods, technique = _style_attributes(style or {})
    hint = style_hint(palette, moods, technique)
    percent = round_half_up(level * 100)
    return f"{user_prompt}\n\nStyle guidance ({strength_label(level)}, {percent}%): {hint}".strip()
