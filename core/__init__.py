# Path: core/__init__.py
# Purpose: Package initializer for core application layer.
# Layer: core.
# Details: Aggregates subpackages for palette extraction, collage, analysis, prompts, generation, and the style library.
