"""Tests for s3_copy_planner/args_parser.py"""

from __future__ import annotations

from pathlib import Path

import pytest

from s3_copy_planner import config
from s3_copy_planner.args_parser import DEFAULT_START_COPY_RELATIVE_KEY, parse_args
from tests.assertions import assert_equal


def test_resolve_with_instructions_defaults():
    args = parse_args(["resolve", "--instructions", "items.jsonl"])

    assert_equal(args.command, "resolve")
    assert_equal(args.instructions, Path("items.jsonl"))
    assert args.event is None
    assert_equal(args.destination_folder_key, "")
    assert_equal(args.maximum_expansion, config.DEFAULT_MAXIMUM_EXPANSION)
    assert args.deadline_seconds is None
    assert args.region is None
    assert not args.verbose


def test_resolve_requires_exactly_one_source():
    with pytest.raises(SystemExit) as exc_info:
        parse_args(["resolve"])
    assert_equal(exc_info.value.code, 2)

    with pytest.raises(SystemExit):
        parse_args(["resolve", "--event", "e.json", "--instructions", "i.jsonl"])


def test_environment_overrides_become_defaults(monkeypatch):
    monkeypatch.setenv(config.MAXIMUM_EXPANSION_ENV, "7")
    monkeypatch.setenv(config.DEADLINE_SECONDS_ENV, "60")
    monkeypatch.setenv(config.REGION_ENV, "eu-west-2")

    args = parse_args(["resolve", "--event", "e.json"])

    assert_equal(args.maximum_expansion, 7)
    assert_equal(args.deadline_seconds, 60.0)
    assert_equal(args.region, "eu-west-2")


def test_command_line_beats_environment(monkeypatch):
    monkeypatch.setenv(config.MAXIMUM_EXPANSION_ENV, "7")
    args = parse_args(["resolve", "--instructions", "i.jsonl", "--maximum-expansion", "3"])
    assert_equal(args.maximum_expansion, 3)


@pytest.mark.parametrize(
    "argv",
    [
        ["resolve", "--instructions", "i.jsonl", "--maximum-expansion", "0"],
        ["thaw", "--event", "e.json", "--deadline-seconds", "-5"],
    ],
)
def test_rejects_non_positive_limits(argv):
    with pytest.raises(SystemExit) as exc_info:
        parse_args(argv)
    assert_equal(exc_info.value.code, 2)


def test_can_write_defaults():
    args = parse_args(["can-write", "--bucket", "dest", "--destination-folder-key", "copies/"])

    assert_equal(args.bucket, "dest")
    assert_equal(args.destination_folder_key, "copies/")
    assert_equal(args.relative_key, DEFAULT_START_COPY_RELATIVE_KEY)


def test_validate_thaw_params_requires_params():
    with pytest.raises(SystemExit):
        parse_args(["validate-thaw-params"])


def test_command_is_required():
    with pytest.raises(SystemExit):
        parse_args([])
