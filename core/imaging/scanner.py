# Path: core/imaging/scanner.py
# Purpose: Collect reference image files from user-supplied paths.
# Layer: core/imaging.
# Details: Expands directories into supported image files so CLIs accept folders or files.

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

SUPPORTED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"}


class ImageScanner:
    """Scan filesystem paths for supported image files."""

    def __init__(self, paths: Iterable[Path]) -> None:
        self.paths = [Path(path) for path in paths]

    def scan(self) -> List[Path]:
        """Return image files in argument order; directories contribute their files sorted by name."""

        found: List[Path] = []
        for path in self.paths:
            if path.is_dir():
                found.extend(self._iter_image_files(path))
            elif path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS:
                found.append(path)
        return found

    @staticmethod
    def _iter_image_files(root: Path) -> Iterable[Path]:
        for path in sorted(root.iterdir()):
            if path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS:
                yield path
