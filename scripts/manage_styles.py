# Path: scripts/manage_styles.py
# Purpose: CLI to list, inspect, edit, revert, and delete saved style profiles.
# Layer: scripts.
# Details: Every edit or revert produces a new profile version with a history snapshot.

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

from config import AppSettings, configure_logging
from core.library import JsonKeyValueStore, StyleLibrary
from core.models.domain import StyleProfile


def _when(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M")


def _show(profile: StyleProfile) -> None:
    print(f"{profile.name}  v{profile.version}  {profile.id}")
    print(f"  description: {profile.description}")
    print(f"  technique:   {profile.visual_technique}")
    print(f"  palette:     {', '.join(profile.palette)}")
    print(f"  moods:       {', '.join(profile.moods)}")
    if profile.reasoning:
        print(f"  reasoning:   {profile.reasoning}")
    for snapshot in profile.history:
        print(f"  - v{snapshot.version} {_when(snapshot.timestamp)} {snapshot.change_log}")


def main() -> None:
    """Dispatch a library management command."""

    parser = argparse.ArgumentParser(description="Manage the PaletteAI style library")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="List saved profiles")
    show = commands.add_parser("show", help="Show a profile and its history")
    show.add_argument("id")
    edit = commands.add_parser("edit", help="Edit profile fields as a new version")
    edit.add_argument("id")
    edit.add_argument("--name")
    edit.add_argument("--description")
    edit.add_argument("--technique")
    edit.add_argument("--palette", nargs="+")
    edit.add_argument("--moods", nargs="+")
    revert = commands.add_parser("revert", help="Restore a previous version as a new version")
    revert.add_argument("id")
    revert.add_argument("version", type=int)
    delete = commands.add_parser("delete", help="Delete a profile")
    delete.add_argument("id")
    args = parser.parse_args()

    load_dotenv()
    settings = AppSettings.from_env()
    configure_logging(settings.log_level)
    library = StyleLibrary(JsonKeyValueStore(settings.storage.library_path), settings.storage.storage_key)
    library.load()

    try:
        if args.command == "list":
            for profile in library.list():
                print(f"{profile.id}  v{profile.version}  {_when(profile.created_at)}  {profile.name}")
        elif args.command == "show":
            profile = library.get(args.id)
            if profile is None:
                raise KeyError(f"Style profile {args.id} not found")
            _show(profile)
        elif args.command == "edit":
            changes = {
                "name": args.name,
                "description": args.description,
                "visual_technique": args.technique,
                "palette": args.palette,
                "moods": args.moods,
            }
            _show(library.edit(args.id, **{key: value for key, value in changes.items() if value is not None}))
        elif args.command == "revert":
            _show(library.revert(args.id, args.version))
        elif args.command == "delete":
            if not library.delete(args.id):
                raise KeyError(f"Style profile {args.id} not found")
            print(f"Deleted {args.id}")
    except (KeyError, ValueError) as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
