"""Argument parsing for the padboard CLI."""

import argparse
import getpass
import os
from pathlib import Path

DEFAULT_SESSION = "default"


def _default_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "default"


def build_parser() -> argparse.ArgumentParser:
    """Build the padboard argument parser."""
    parser = argparse.ArgumentParser(
        prog="padboard",
        description="Multi-pad clipboard for records and files",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file (default: ~/.padboard/config.json + ./.padboard/config.json)",
    )
    parser.add_argument(
        "--user",
        default=_default_user(),
        help="User whose clipboard to open (default: current user)",
    )
    parser.add_argument(
        "--session",
        default=os.environ.get("PADBOARD_SESSION", DEFAULT_SESSION),
        help="Session id for session-scoped clipboards (default: $PADBOARD_SESSION)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("show", help="List all pads and their items")

    select_parser = subparsers.add_parser("select", help="Select a record")
    select_parser.add_argument("schema", help="Record schema (table) name")
    select_parser.add_argument("record_id", help="Record id")
    select_parser.add_argument("--copy", action="store_true", help="Switch pad to copy mode")

    select_path_parser = subparsers.add_parser("select-path", help="Select a file or folder")
    select_path_parser.add_argument("path", help="File or folder path")
    select_path_parser.add_argument("--copy", action="store_true", help="Switch pad to copy mode")

    deselect_parser = subparsers.add_parser("deselect", help="Remove a key from the active pad")
    deselect_parser.add_argument("key", help='Selection key, e.g. "tt_content|5"')

    pad_parser = subparsers.add_parser("pad", help="Switch the active pad")
    pad_parser.add_argument("pad_id", help='Pad id: "normal" or "tab_<n>"')

    mode_parser = subparsers.add_parser("mode", help="Set copy or move mode")
    mode_parser.add_argument("mode", choices=["copy", "move"])

    clear_parser = subparsers.add_parser("clear", help="Empty a pad (default: active pad)")
    clear_parser.add_argument("pad_id", nargs="?", help="Pad to empty")

    paste_parser = subparsers.add_parser("paste", help="Print the paste command batch as JSON")
    paste_parser.add_argument("target_ref", help='Target "<schema>|<id>" (e.g. "pages|30")')
    paste_parser.add_argument("--files", action="store_true", help="Paste files instead of records")

    delete_parser = subparsers.add_parser("delete", help="Print the delete command batch as JSON")
    delete_parser.add_argument("--files", action="store_true", help="Delete files instead of records")

    subparsers.add_parser("prune", help="Drop selections that no longer exist")
    subparsers.add_parser("export", help="Print export parameters for the active pad")

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)
