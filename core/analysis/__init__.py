# Path: core/analysis/__init__.py
# Purpose: Package initializer for style inference.
# Layer: core/analysis.
# Details: Exposes the analyzer, its stage primitives, and the merge policy.

from .json_extract import lenient_json_loads
from .merge import DeterministicStyle, fallback_style_name, merge_style_analysis
from .orchestrator import StyleAnalysisReport, StyleAnalyzer
from .stages import StageResult, run_best_effort
from .vision import ExtractedStyle, VisionStyleExtractor, sanitize_extracted_style

__all__ = [
    "DeterministicStyle",
    "ExtractedStyle",
    "StageResult",
    "StyleAnalysisReport",
    "StyleAnalyzer",
    "VisionStyleExtractor",
    "fallback_style_name",
    "lenient_json_loads",
    "merge_style_analysis",
    "run_best_effort",
    "sanitize_extracted_style",
]
