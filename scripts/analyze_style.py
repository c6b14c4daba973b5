# Path: scripts/analyze_style.py
# Purpose: CLI tool to derive a style profile from reference images and save it to the library.
# Layer: scripts.
# Details: Demonstrates how to wire loading, analysis, and library persistence together.

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

from config import AppSettings, configure_logging
from core.analysis.orchestrator import StyleAnalyzer
from core.collage.builder import DEFAULT_MAX_IMAGES
from core.imaging.codecs import image_to_data_url
from core.imaging.loader import load_images
from core.imaging.scanner import ImageScanner
from core.library import JsonKeyValueStore, StyleLibrary
from core.providers.huggingface import HuggingFaceClient


async def run(args: argparse.Namespace, settings: AppSettings) -> int:
    paths = ImageScanner(args.paths).scan()
    if not paths:
        print("No supported images found.", file=sys.stderr)
        return 1

    images = await load_images(paths, show_progress=True)

    async with HuggingFaceClient(settings.provider) as client:
        analyzer = StyleAnalyzer.from_settings(client, settings.models)
        result = await analyzer.analyze(images, on_progress=lambda status: print(status, file=sys.stderr))

    print(json.dumps({k: v for k, v in result.to_dict().items() if k != "embedding"}, indent=2))

    if args.no_save:
        return 0

    library = StyleLibrary(JsonKeyValueStore(settings.storage.library_path), settings.storage.storage_key)
    library.load()
    references = [image_to_data_url(image.convert("RGB")) for image in images[:DEFAULT_MAX_IMAGES]]
    profile = library.create_from_analysis(result, references)
    print(f"Saved style profile {profile.id} ({profile.name}) to {settings.storage.library_path}")
    return 0


def main() -> None:
    """Analyze reference images and store the resulting style profile."""

    parser = argparse.ArgumentParser(description="Extract a style profile from reference images")
    parser.add_argument("paths", type=Path, nargs="+", help="Image files or folders containing reference images")
    parser.add_argument("--no-save", action="store_true", help="Print the analysis without saving a profile")
    args = parser.parse_args()

    load_dotenv()
    settings = AppSettings.from_env()
    configure_logging(settings.log_level)
    sys.exit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()
