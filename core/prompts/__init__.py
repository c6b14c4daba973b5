# Path: core/prompts/__init__.py
# Purpose: Package initializer for prompt construction.
# Layer: core/prompts.
# Details: Exposes style fusion and prompt refiners.

from .fusion import fuse_prompt, strength_label, style_hint
from .refiners import GenerationMode, augment_prompt, creativity_instruction

__all__ = ["GenerationMode", "augment_prompt", "creativity_instruction", "fuse_prompt", "strength_label", "style_hint"]
