"""
Module: cli

Purpose:
    Command line entry point. Loads a scene from JSON, runs one command
    against it and writes the results.

        offset-border apply  scene.json --output bordered.json
        offset-border master scene.json --pdf pages.pdf --preview preview.png
        offset-border config scene.json --message '{"type": "save", "settings": {"gap": 12}}'

Key Functions:
    - main(): Parse arguments and run a command
    - build_parser(): argparse definition

Dependencies:
    - pipeline.controller: Commands
    - document.serialization: Scene JSON
    - output: PDF and preview rendering

Used By:
    - offset_border.__main__, the ``offset-border`` console script
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from offset_border import __version__
from offset_border.document import load_document, save_document
from offset_border.errors import OffsetBorderError
from offset_border.layout import MasterConfig
from offset_border.layout.config import DEFAULT_CHUNK_SIZE
from offset_border.output import render_pages_to_pdf, render_preview
from offset_border.pipeline import CommandResult, run_command
from offset_border.settings import ConfigSession, SettingsStore

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".offset-border" / "settings.json"
COMMANDS = ("apply", "master", "config")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="offset-border",
        description="Draw offset borders behind layers and pack them onto pages",
    )
    parser.add_argument("command", choices=COMMANDS, help="Command to run")
    parser.add_argument("scene", type=Path, help="Scene JSON file")
    parser.add_argument(
        "--settings", type=Path, default=DEFAULT_SETTINGS_PATH,
        help=f"Settings JSON file (default: {DEFAULT_SETTINGS_PATH})",
    )
    parser.add_argument("--output", "-o", type=Path, help="Write the modified scene here (default: overwrite SCENE)")
    parser.add_argument("--pdf", type=Path, help="Render page frames to this PDF (master)")
    parser.add_argument("--preview", type=Path, help="Save a PNG preview of the scene")
    parser.add_argument("--message", help="Config UI message as JSON (default: read stdin)")
    parser.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE, help="Nodes per chunk")
    parser.add_argument("--no-resize", action="store_true", help="Keep photo sizes in the master flow")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    if args.chunk_size < 1:
        parser.error("--chunk-size must be >= 1")

    try:
        document = load_document(args.scene)
    except OffsetBorderError as e:
        logger.error(f"Cannot load scene: {e}")
        return 1

    store = SettingsStore(args.settings)
    master_config = MasterConfig(resize_photos=not args.no_resize)

    outcome = asyncio.run(run_command(
        args.command,
        document,
        store,
        master_config=master_config,
        chunk_size=args.chunk_size,
    ))

    if isinstance(outcome, ConfigSession):
        return _run_config(outcome, args.message)

    _write_outputs(document, outcome, args)
    return 0


def _run_config(session: ConfigSession, raw_message: Optional[str]) -> int:
    """Print the load message, then handle one UI message."""
    print(json.dumps(session.load_message()))

    if raw_message is None:
        if sys.stdin.isatty():
            return 0
        raw_message = sys.stdin.read()
    if not raw_message.strip():
        return 0

    try:
        message = json.loads(raw_message)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid config message: {e}")
        return 1

    result = session.handle_message(message)
    logger.info(f"Config: {result.value}")
    return 0


def _write_outputs(document, result: CommandResult, args: argparse.Namespace) -> None:
    for failure in result.failures:
        logger.warning(f"  item {failure.index}: {failure.message}")

    output = args.output or args.scene
    save_document(document, output)

    if args.pdf is not None:
        render_pages_to_pdf(document, result.pages or None, args.pdf)

    if args.preview is not None:
        render_preview(document, args.preview)


if __name__ == "__main__":
    sys.exit(main())
