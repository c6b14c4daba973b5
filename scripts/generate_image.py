# Path: scripts/generate_image.py
# Purpose: Simple CLI to render a prompt in the style of a saved profile.
# Layer: scripts.
# Details: Loads the library, fuses the prompt with the chosen style, and writes the image to disk.

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

from config import AppSettings, configure_logging
from core.errors import ConfigurationError, GenerationError
from core.generation import GenerationGateway, GenerationSession
from core.imaging.codecs import decode_data_url
from core.library import JsonKeyValueStore, StyleLibrary
from core.models.domain import ASPECT_RATIOS, RESOLUTIONS, GeneratedImage
from core.providers.huggingface import HuggingFaceClient

EXTENSIONS = {"image/png": ".png", "image/jpeg": ".jpg", "image/webp": ".webp"}


def _write(image: GeneratedImage, stem: Path) -> Path:
    data, mime_type = decode_data_url(image.url)
    target = stem.with_suffix(EXTENSIONS.get(mime_type, ".png"))
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return target


async def run(args: argparse.Namespace, settings: AppSettings) -> int:
    library = StyleLibrary(JsonKeyValueStore(settings.storage.library_path), settings.storage.storage_key)
    profiles = library.load()
    if not profiles:
        print("The style library is empty; run analyze_style.py first.", file=sys.stderr)
        return 1

    profile = library.get(args.style) if args.style else profiles[0]
    if profile is None:
        print(f"Style profile {args.style} not found.", file=sys.stderr)
        return 1

    async with HuggingFaceClient(settings.provider) as client:
        session = GenerationSession(
            GenerationGateway(client, settings.models.image), profile, args.aspect_ratio, args.resolution
        )
        try:
            outcome = await session.generate(
                args.prompt, intensity=args.intensity, negative_prompt=args.negative, compare=args.compare
            )
            variations = await session.variations(outcome.image, args.variations) if args.variations else []
        except (ConfigurationError, GenerationError) as exc:
            print(f"Generation failed: {exc}", file=sys.stderr)
            return 2

    print(f"Fused prompt:\n{outcome.image.fused_prompt}\n")
    print(f"Wrote {_write(outcome.image, args.out)}")
    if outcome.comparison is not None:
        print(f"Wrote {_write(outcome.comparison, args.out.with_name(args.out.stem + '_raw'))}")
    for index, variation in enumerate(variations, start=1):
        print(f"Wrote {_write(variation, args.out.with_name(f'{args.out.stem}_v{index}'))}")
    return 0


def main() -> None:
    """Generate an image from the command line."""

    parser = argparse.ArgumentParser(description="Render a prompt with a saved PaletteAI style")
    parser.add_argument("prompt", type=str, help="What to draw")
    parser.add_argument("--style", type=str, default=None, help="Profile id (defaults to the newest profile)")
    parser.add_argument("--intensity", type=float, default=0.8, help="Style influence between 0 and 1")
    parser.add_argument("--negative", type=str, default="", help="Things to exclude from the image")
    parser.add_argument("--aspect-ratio", choices=ASPECT_RATIOS, default="1:1")
    parser.add_argument("--resolution", choices=RESOLUTIONS, default="1K")
    parser.add_argument("--compare", action="store_true", help="Also render the prompt without style guidance")
    parser.add_argument("--variations", type=int, default=0, help="Number of extra variations to render")
    parser.add_argument("--out", type=Path, default=Path("output/generated"), help="Output path without extension")
    args = parser.parse_args()

    load_dotenv()
    settings = AppSettings.from_env()
    configure_logging(settings.log_level)
    sys.exit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()
