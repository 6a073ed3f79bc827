#!/usr/bin/env python3
"""
SoundCue command line.

Usage:
    python -m soundcue hook [--event JSON]    Handle one host event (stdin by default)
    python -m soundcue pack [NAME]            List packs or switch the active pack
    python -m soundcue toggle [ACTION]        toggle / pause / resume / status
    python -m soundcue volume LEVEL           Set volume (0.0-1.0)
    python -m soundcue rotation [NAME ...]    Set or clear the pack rotation

Global options:
    --home DIR      Directory for config.json and state.json
    --packs DIR     Directory of sound packs
    --seed N        Random seed (reproducible picks)
    --verbose       Log engine decisions to stderr
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .commands import TOGGLE_ACTIONS, pack_command, rotation_command, toggle_command, volume_command
from .config import ConfigError, ConfigStore, ManifestProvider
from .config import paths
from .engine import CueEngine
from .output import LogLevel, create_console_logger, create_null_logger
from .utils.validators import ValidationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="soundcue",
        description="Audio cues for coding-assistant lifecycle events",
    )
    parser.add_argument("--home", type=Path, default=None,
                        help="Directory for config.json and state.json")
    parser.add_argument("--packs", type=Path, default=None,
                        help="Directory of sound packs")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible picks")
    parser.add_argument("--verbose", action="store_true",
                        help="Log engine decisions to stderr")

    sub = parser.add_subparsers(dest="command", required=True)

    hook = sub.add_parser("hook", help="Handle one host event")
    hook.add_argument("--event", default=None,
                      help="Event JSON (read from stdin when omitted)")

    pack = sub.add_parser("pack", help="List packs or switch the active pack")
    pack.add_argument("name", nargs="?", default=None)

    toggle = sub.add_parser("toggle", help="Pause, resume or report")
    toggle.add_argument("action", nargs="?", default="toggle", choices=TOGGLE_ACTIONS)

    volume = sub.add_parser("volume", help="Set volume (0.0-1.0)")
    volume.add_argument("level")

    rotation = sub.add_parser("rotation", help="Set or clear the pack rotation")
    rotation.add_argument("names", nargs="*")

    return parser


def run_hook(args: argparse.Namespace, logger) -> int:
    """Handle one event. Always exits 0 so the host is never disturbed."""
    try:
        raw = args.event if args.event is not None else sys.stdin.read()
        event = json.loads(raw) if raw.strip() else None
    except ValueError as e:
        logger.warning("engine", "Ignoring malformed event JSON", error=str(e))
        return 0

    engine = CueEngine.from_paths(runtime_dir=args.home, packs_dir=args.packs,
                                  seed=args.seed, logger=logger)
    outcome = engine.handle_event(event)
    logger.info("engine", f"Outcome: {outcome.reason}",
                cue=outcome.category, pack=outcome.pack)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = create_console_logger(LogLevel.DEBUG) if args.verbose else create_null_logger()

    if args.command == "hook":
        return run_hook(args, logger)

    base = args.home or paths.runtime_dir()
    store = ConfigStore(paths.config_path(base), logger=logger)
    manifests = ManifestProvider(args.packs or paths.packs_dir(), logger=logger)

    try:
        if args.command == "pack":
            message = pack_command(store, manifests, args.name)
        elif args.command == "toggle":
            message = toggle_command(store, args.action)
        elif args.command == "volume":
            message = volume_command(store, args.level)
        else:
            message = rotation_command(store, manifests, args.names)
    except (ValidationError, ConfigError) as e:
        print(f"soundcue: {e}", file=sys.stderr)
        return 1

    print(message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
