"""
Command-line interface and main entry point for s3_copy_planner.

Exit codes: 0 success, 1 terminal error, 2 bad arguments, 3 still thawing
(run the thaw command again later).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from .args_parser import parse_args
from .aws_client import create_s3_client
from .config import ConfigurationError
from .deadline import Deadline
from .errors import CopyPlannerError, StillThawingError
from .instructions import load_copy_instructions, load_event
from .models import BatchInput
from .resolver import CopyPlanner, resolve_event
from .thaw_gate import gate_event
from .thaw_policy import validate_thaw_params
from .write_check import check_can_write

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_STILL_THAWING = 3


def _write_json(payload: Any, args: argparse.Namespace) -> None:
    rendered = json.dumps(payload, indent=2)
    output = getattr(args, "output", None)
    if output:
        output.write_text(rendered + "\n", encoding="utf-8")
        print(f"Wrote {len(payload)} resolved object(s) to {output}")
    else:
        print(rendered)


def _run_resolve(s3, args: argparse.Namespace, deadline: Deadline) -> int:
    if args.event:
        resolved = resolve_event(s3, load_event(args.event), deadline)
    else:
        items = load_copy_instructions(args.instructions)
        batch_input = BatchInput(
            destination_folder_key=args.destination_folder_key,
            maximum_expansion=args.maximum_expansion,
        )
        resolved = [obj.to_dict() for obj in CopyPlanner(s3, deadline).resolve(batch_input, items)]
    _write_json(resolved, args)
    return EXIT_OK


def _run_thaw(s3, args: argparse.Namespace, deadline: Deadline) -> int:
    event = load_event(args.event)
    try:
        gate_event(s3, event, deadline)
    except StillThawingError as exc:
        print(f"Still thawing: {exc}")
        return EXIT_STILL_THAWING
    print(f"All {len(event.get('Items') or [])} object(s) are readable")
    return EXIT_OK


def _run_can_write(s3, args: argparse.Namespace, deadline: Deadline) -> int:
    key = check_can_write(s3, args.bucket, args.destination_folder_key, args.relative_key, deadline)
    print(f"Destination writable: s3://{args.bucket}/{key}")
    return EXIT_OK


COMMANDS = {
    "resolve": _run_resolve,
    "thaw": _run_thaw,
    "can-write": _run_can_write,
}


def run_command(args: argparse.Namespace) -> int:
    """Execute a parsed command and map errors onto exit codes."""
    try:
        if args.command == "validate-thaw-params":
            validate_thaw_params(load_event(args.params))
            print("Thaw params are valid")
            return EXIT_OK
        deadline = Deadline.after(args.deadline_seconds)
        s3 = create_s3_client(region=args.region, env_path=args.env_file, read_timeout=deadline.remaining())
        return COMMANDS[args.command](s3, args, deadline)
    except CopyPlannerError as exc:
        logging.error("%s: %s", type(exc).__name__, exc)
        return EXIT_ERROR
    except (ClientError, BotoCoreError):
        logging.exception("S3 request failed")
        return EXIT_ERROR
    except OSError as exc:
        logging.error("Cannot access file: %s", exc)
        return EXIT_ERROR


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the s3_copy_planner CLI."""
    try:
        args = parse_args(sys.argv[1:] if argv is None else argv)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )
    return run_command(args)
