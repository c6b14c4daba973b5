# Path: core/generation/__init__.py
# Purpose: Package initializer for image generation.
# Layer: core/generation.
# Details: Exposes the gateway, size mapping, and the per-profile generation session.

from .gateway import GenerationGateway, aspect_to_size
from .session import GenerationOutcome, GenerationSession

__all__ = ["GenerationGateway", "GenerationOutcome", "GenerationSession", "aspect_to_size"]
