"""padboard command line entry point.

Each invocation is one session turn: the clipboard is loaded, one command
is applied, and the clipboard is saved if it changed.

    padboard show
    padboard select tt_content 5 --copy
    padboard pad tab_1
    padboard paste "pages|30"
    padboard delete --files
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any

from rich.markup import escape

from padboard.cli.arg_parser import parse_args
from padboard.cli.console import get_console
from padboard.clipboard.commands import select_path, select_record
from padboard.clipboard.manager import ClipboardController
from padboard.clipboard.types import FILE_MARKER
from padboard.config.loader import load_config
from padboard.core.errors import PadboardError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send padboard logs to stderr (WARNING, or DEBUG when verbose)."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    padboard_logger = logging.getLogger("padboard")
    padboard_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    # Remove any existing handlers to avoid duplicates on reconfigure
    padboard_logger.handlers.clear()
    padboard_logger.addHandler(handler)
    padboard_logger.propagate = False


def _print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2))


def _print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def _show(controller: ClipboardController) -> None:
    console = get_console()
    pads = controller.pads
    for pad_id, pad in pads.pads.items():
        marker = "*" if pad_id == pads.current else " "
        mode = pad.mode.label if pad.has_items() else "-"
        console.print(f"{marker} [bold]{escape(pad_id)}[/bold] ({mode}, {len(pad.items)} items)")
        for key, payload in pad.items.items():
            detail = f"  {escape(str(payload))}" if key.startswith(FILE_MARKER) else ""
            console.print(f"    {escape(key)}{detail}")
    if pads.locked:
        console.print("[dim]Locked to the default pad[/dim]")


def _dispatch(args: argparse.Namespace, controller: ClipboardController) -> None:
    command = args.command
    if command == "show":
        _show(controller)
    elif command == "select":
        controller.apply_command(select_record(args.schema, args.record_id, copy=args.copy))
    elif command == "select-path":
        path = os.path.abspath(args.path)
        controller.apply_command(select_path(path, copy=args.copy))
    elif command == "deselect":
        controller.remove_key(args.key)
    elif command == "pad":
        controller.switch_pad(args.pad_id)
    elif command == "mode":
        controller.set_mode(args.mode == "copy")
    elif command == "clear":
        controller.clear_pad(args.pad_id or controller.current)
    elif command == "paste":
        if args.files:
            _print_json(controller.paste_paths(args.target_ref))
        else:
            _print_json(controller.paste_records(args.target_ref))
    elif command == "delete":
        _print_json(controller.delete_paths() if args.files else controller.delete_records())
    elif command == "prune":
        _print_json(controller.prune_active_pad())
    elif command == "export":
        _print_json(controller.export_parameters())


def run(argv: list[str] | None = None) -> int:
    """Run one CLI command. Returns the process exit code."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config)
        with ClipboardController.from_config(config, args.user, session_id=args.session) as controller:
            _dispatch(args, controller)
    except (PadboardError, OSError) as e:
        # OSError covers resolver failures such as PermissionError during prune
        _print_error(str(e))
        return 1
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
