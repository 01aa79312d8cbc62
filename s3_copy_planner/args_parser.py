"""
Argument parsing for the s3_copy_planner CLI.

Handles command-line argument definition, parsing, and validation.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .config import get_deadline_seconds_default, get_maximum_expansion_default, get_region_default

DEFAULT_START_COPY_RELATIVE_KEY = "STARTED_COPY.txt"


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add connection, deadline and logging arguments shared by every command."""
    parser.add_argument(
        "--region",
        default=get_region_default(),
        help="AWS region for the S3 client (default: S3_COPY_PLANNER_REGION or the boto3 default).",
    )
    parser.add_argument("--env-file", help="Optional .env file holding AWS credentials (default: AWS_ENV_FILE or ~/.env).")
    parser.add_argument(
        "--deadline-seconds",
        type=float,
        default=get_deadline_seconds_default(),
        help="Abort with a deadline error if S3 calls are still needed after this many seconds.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")


def add_resolve_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments of the resolve command."""
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--event", type=Path, help="JSON event with BatchInput and Items.")
    source.add_argument("--instructions", type=Path, help="JSONL copy instructions, one item per line.")
    parser.add_argument(
        "--destination-folder-key",
        default="",
        help='Slash terminated destination folder used with --instructions (default: "" for the bucket root).',
    )
    parser.add_argument(
        "--maximum-expansion",
        type=int,
        default=get_maximum_expansion_default(),
        help="Safety ceiling on objects per wildcard used with --instructions.",
    )
    parser.add_argument("--output", type=Path, help="Write the resolved objects here instead of stdout.")


def add_thaw_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments of the thaw command."""
    parser.add_argument("--event", type=Path, required=True, help="JSON event with Items and thaw BatchInput.")


def add_thaw_params_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments of the validate-thaw-params command."""
    parser.add_argument("--params", type=Path, required=True, help="JSON object of <tier>ThawDays/<tier>ThawSpeed.")


def add_can_write_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments of the can-write command."""
    parser.add_argument("--bucket", required=True, help="Destination bucket.")
    parser.add_argument("--destination-folder-key", default="", help="Slash terminated destination folder.")
    parser.add_argument(
        "--relative-key",
        default=DEFAULT_START_COPY_RELATIVE_KEY,
        help=f"Marker object name below the folder (default: {DEFAULT_START_COPY_RELATIVE_KEY}).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the parser with one sub-command per planner operation."""
    parser = argparse.ArgumentParser(
        description="Plan S3 to S3 copies: resolve wildcards and destinations, and thaw archived objects."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    commands = (
        ("resolve", "Check objects exist, expand wildcards and compute destination keys.", add_resolve_arguments),
        ("thaw", "Request restores for archived objects and report whether any are still thawing.", add_thaw_arguments),
        ("validate-thaw-params", "Check thaw days/speed overrides without calling S3.", add_thaw_params_arguments),
        ("can-write", "Write a marker object to prove the destination is writable.", add_can_write_arguments),
    )
    for name, help_text, add_arguments in commands:
        subparser = subparsers.add_parser(name, help=help_text, description=help_text)
        add_arguments(subparser)
        add_common_arguments(subparser)
    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse and validate command-line arguments."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.deadline_seconds is not None and args.deadline_seconds <= 0:
        parser.error("--deadline-seconds must be positive.")
    if getattr(args, "maximum_expansion", 1) <= 0:
        parser.error("--maximum-expansion must be positive.")
    return args
