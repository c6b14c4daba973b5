# Path: core/prompts/refiners.py
# Purpose: Apply user-selected refinements to a prompt before style fusion.
# Layer: core/prompts.
# Details: Adds exclusion hints and, when editing an input image, a creativity instruction.

from __future__ import annotations

from typing import Literal

GenerationMode = Literal["CREATE", "EDIT"]


def creativity_instruction(creativity: float) -> str:
    if creativity < 0.3:
        return "Keep strict adherence to structure."
    if creativity > 0.7:
        return "Allow significant creative freedom."
    return "Balanced transformation."


def augment_prompt(
    prompt: str,
    negative_prompt: str = "",
    mode: GenerationMode = "CREATE",
    creativity: float = 0.5,
) -> str:
    augmented = prompt
    if negative_prompt:
        augmented += f" (Exclude: {negative_prompt})"
    if mode == "EDIT":
        augmented += f" [Instruction: {creativity_instruction(creativity)}]"
    return augmented
