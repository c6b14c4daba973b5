# Path: scripts/consult.py
# Purpose: CLI to ask the creative consultant for prompt ideas.
# Layer: scripts.
# Details: Uses the newest (or chosen) style profile as context for the text model.

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
from core.assistant import CreativeConsultant
from core.errors import ConfigurationError, InferenceError
from core.library import JsonKeyValueStore, StyleLibrary
from core.providers.huggingface import HuggingFaceClient


async def run(args: argparse.Namespace, settings: AppSettings) -> int:
    library = StyleLibrary(JsonKeyValueStore(settings.storage.library_path), settings.storage.storage_key)
    profiles = library.load()
    profile = None
    if not args.raw:
        profile = library.get(args.style) if args.style else (profiles[0] if profiles else None)

    async with HuggingFaceClient(settings.provider) as client:
        consultant = CreativeConsultant(client, settings.models.text)
        try:
            reply = await consultant.ask(args.question, profile)
        except (ConfigurationError, InferenceError) as exc:
            print(f"Consultant failed: {exc}", file=sys.stderr)
            return 2

    print(reply.text)
    if reply.image_prompt:
        print(f"\nSuggested prompt: {reply.image_prompt}")
    return 0


def main() -> None:
    """Ask one question and print the consultant's reply."""

    parser = argparse.ArgumentParser(description="Brainstorm prompts with the PaletteAI creative director")
    parser.add_argument("question", type=str)
    parser.add_argument("--style", type=str, default=None, help="Profile id used as context")
    parser.add_argument("--raw", action="store_true", help="Ignore saved styles")
    args = parser.parse_args()

    load_dotenv()
    settings = AppSettings.from_env()
    configure_logging(settings.log_level)
    sys.exit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()
