# Path: core/collage/__init__.py
# Purpose: Package initializer for reference collage composition.
# Layer: core/collage.
# Details: Exposes the collage builder and its result type.

from .builder import ReferenceCollage, cover_crop_box, create_reference_collage, grid_shape

__all__ = ["ReferenceCollage", "cover_crop_box", "create_reference_collage", "grid_shape"]
