"""Loading copy instructions (JSONL) and event files (JSON) from disk."""

from __future__ import annotations

import json
from pathlib import Path

from .errors import CopyInstructionsError
from .models import SourceItem


def parse_copy_instructions(text: str) -> list[SourceItem]:
    """Parse JSONL text with one copy instruction object per line.

    Blank lines are ignored.

    Raises:
        CopyInstructionsError: If a line is not a JSON object.
    """
    items: list[SourceItem] = []
    for line_number, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            raise CopyInstructionsError(f"line {line_number}: invalid JSON ({exc.msg})") from exc
        if not isinstance(data, dict):
            raise CopyInstructionsError(f"line {line_number}: each copy instruction must be a JSON object")
        items.append(SourceItem.from_dict(data))
    return items


def load_copy_instructions(path: Path) -> list[SourceItem]:
    """Read a JSONL copy instructions file."""
    return parse_copy_instructions(Path(path).read_text(encoding="utf-8"))


def load_event(path: Path) -> dict:
    """Read a JSON event file.

    Raises:
        CopyInstructionsError: If the file is not a JSON object.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CopyInstructionsError(f"{path}: invalid JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise CopyInstructionsError(f"{path}: event must be a JSON object")
    return data
