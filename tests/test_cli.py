"""Tests for s3_copy_planner/cli.py module."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from s3_copy_planner import config
from s3_copy_planner.cli import EXIT_ERROR, EXIT_OK, EXIT_STILL_THAWING, main
from tests.assertions import assert_equal
from tests.conftest import FILE1, FILE2, FILE3, LOTS_OF_PREFIX, PATH1, TEST_BUCKET, TEST_PREFIX
from tests.s3_test_utils import make_client_error


@pytest.fixture(name="client")
def fixture_client(populated_s3):
    """Route create_s3_client to the in-memory bucket."""
    with patch("s3_copy_planner.cli.create_s3_client", return_value=populated_s3) as mock_create:
        yield mock_create


def _write_json(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_resolve_event_prints_json(tmp_path, client, capsys):
    event = _write_json(
        tmp_path / "event.json",
        {
            "BatchInput": {"destinationFolderKey": "abc/", "maximumExpansion": 5},
            "Items": [{"sourceBucket": TEST_BUCKET, "sourceKey": f"{TEST_PREFIX}/aa/*"}],
        },
    )

    exit_code = main(["resolve", "--event", event, "--region", "us-east-2"])

    assert_equal(exit_code, EXIT_OK)
    output = json.loads(capsys.readouterr().out)
    assert_equal([obj["destinationKey"] for obj in output], [f"abc/{FILE2}", f"abc/{FILE3}"])
    _, kwargs = client.call_args
    assert_equal(kwargs["region"], "us-east-2")
    assert kwargs["read_timeout"] is None


def test_resolve_instructions_to_output_file(tmp_path, client, capsys):
    instructions = tmp_path / "items.jsonl"
    instructions.write_text(json.dumps({"sourceBucket": TEST_BUCKET, "sourceKey": PATH1}) + "\n", encoding="utf-8")
    output = tmp_path / "resolved.json"

    exit_code = main(
        [
            "resolve",
            "--instructions",
            str(instructions),
            "--destination-folder-key",
            "out/",
            "--output",
            str(output),
        ]
    )

    assert_equal(exit_code, EXIT_OK)
    resolved = json.loads(output.read_text(encoding="utf-8"))
    assert_equal(resolved[0]["destinationKey"], f"out/{FILE1}")
    assert "Wrote 1 resolved object(s)" in capsys.readouterr().out


def test_resolve_errors_exit_with_error(tmp_path, client, caplog):
    instructions = tmp_path / "items.jsonl"
    instructions.write_text(json.dumps({"sourceBucket": TEST_BUCKET, "sourceKey": f"{LOTS_OF_PREFIX}*"}) + "\n")

    exit_code = main(["resolve", "--instructions", str(instructions), "--maximum-expansion", "5"])

    assert_equal(exit_code, EXIT_ERROR)
    assert "WildcardExpansionMaximumError" in caplog.text


def test_folder_entry_in_listing_exits_with_error(tmp_path, populated_s3, client, caplog):
    populated_s3.add(TEST_BUCKET, f"{TEST_PREFIX}/aa/sub/", size=5)
    event = _write_json(
        tmp_path / "event.json",
        {
            "BatchInput": {"destinationFolderKey": "", "maximumExpansion": 5},
            "Items": [{"sourceBucket": TEST_BUCKET, "sourceKey": f"{TEST_PREFIX}/aa/*"}],
        },
    )

    assert_equal(main(["resolve", "--event", event]), EXIT_ERROR)
    assert f"SourceKeyNotAnObjectError: Object s3://{TEST_BUCKET}/{TEST_PREFIX}/aa/sub/" in caplog.text


def test_folder_source_key_exits_with_error(tmp_path, client, caplog):
    instructions = tmp_path / "items.jsonl"
    instructions.write_text(json.dumps({"sourceBucket": TEST_BUCKET, "sourceKey": "folder/"}) + "\n")

    assert_equal(main(["resolve", "--instructions", str(instructions)]), EXIT_ERROR)
    assert "SourceKeyFieldInvalid" in caplog.text


def test_missing_input_file_exits_with_error(tmp_path, client):
    assert_equal(main(["resolve", "--event", str(tmp_path / "absent.json")]), EXIT_ERROR)


def test_thaw_reports_still_thawing(tmp_path, populated_s3, client, capsys):
    event = _write_json(
        tmp_path / "thaw.json",
        {"Items": [{"bucket": TEST_BUCKET, "key": f"{TEST_PREFIX}/bb/file4.fastq"}]},
    )

    assert_equal(main(["thaw", "--event", event]), EXIT_STILL_THAWING)
    assert "1/1 are in the process of thawing" in capsys.readouterr().out
    assert_equal(len(populated_s3.restore_calls), 1)


def test_thaw_ready(tmp_path, client, capsys):
    event = _write_json(tmp_path / "thaw.json", {"Items": [{"bucket": TEST_BUCKET, "key": PATH1}]})

    assert_equal(main(["thaw", "--event", event]), EXIT_OK)
    assert "All 1 object(s) are readable" in capsys.readouterr().out


def test_thaw_restore_failure_exits_with_error(tmp_path, populated_s3, client):
    key = f"{TEST_PREFIX}/bb/file4.fastq"
    populated_s3.restore_errors[(TEST_BUCKET, key)] = make_client_error("InvalidObjectState", "RestoreObject")
    event = _write_json(tmp_path / "thaw.json", {"Items": [{"bucket": TEST_BUCKET, "key": key}]})

    assert_equal(main(["thaw", "--event", event]), EXIT_ERROR)


def test_validate_thaw_params_does_not_create_client(tmp_path, client, capsys):
    params = _write_json(tmp_path / "params.json", {"glacierDeepArchiveThawSpeed": "Standard"})

    assert_equal(main(["validate-thaw-params", "--params", params]), EXIT_OK)
    assert "Thaw params are valid" in capsys.readouterr().out
    client.assert_not_called()


def test_validate_thaw_params_rejects_bad_speed(tmp_path, client):
    params = _write_json(tmp_path / "params.json", {"glacierDeepArchiveThawSpeed": "Expedited"})
    assert_equal(main(["validate-thaw-params", "--params", params]), EXIT_ERROR)


def test_can_write(populated_s3, client, capsys):
    exit_code = main(["can-write", "--bucket", "dest", "--destination-folder-key", "copies/"])

    assert_equal(exit_code, EXIT_OK)
    assert_equal(populated_s3.put_calls[0]["Key"], "copies/STARTED_COPY.txt")
    assert "s3://dest/copies/STARTED_COPY.txt" in capsys.readouterr().out


def test_can_write_access_denied(populated_s3, client):
    populated_s3.put_errors[("dest", "STARTED_COPY.txt")] = make_client_error("AccessDenied", "PutObject")
    assert_equal(main(["can-write", "--bucket", "dest"]), EXIT_ERROR)


def test_unexpected_s3_errors_exit_with_error(tmp_path, populated_s3, client):
    populated_s3.head_errors[(TEST_BUCKET, PATH1)] = make_client_error("SlowDown")
    event = _write_json(
        tmp_path / "event.json",
        {
            "BatchInput": {"destinationFolderKey": "", "maximumExpansion": 5},
            "Items": [{"sourceBucket": TEST_BUCKET, "sourceKey": PATH1}],
        },
    )

    assert_equal(main(["resolve", "--event", event]), EXIT_ERROR)


def test_deadline_is_passed_to_client(tmp_path, client):
    event = _write_json(tmp_path / "event.json", {"BatchInput": {"destinationFolderKey": "", "maximumExpansion": 1}})

    main(["resolve", "--event", event, "--deadline-seconds", "120"])

    _, kwargs = client.call_args
    assert 0 < kwargs["read_timeout"] <= 120


def test_bad_environment_override_exits_with_error(monkeypatch, client, capsys):
    monkeypatch.setenv(config.MAXIMUM_EXPANSION_ENV, "many")

    assert_equal(main(["resolve", "--event", "e.json"]), EXIT_ERROR)
    assert "Configuration error" in capsys.readouterr().err
