"""Pytest configuration and shared fixtures for the S3 copy planner."""

# pylint: disable=wrong-import-position

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from s3_copy_planner import config


@pytest.fixture(autouse=True)
def isolated_planner_env(tmp_path, monkeypatch):
    """Auto-use fixture that keeps tests away from real credentials and overrides.

    Points AWS_ENV_FILE at an empty temporary .env file and clears every
    planner environment override.
    """
    env_file = tmp_path / ".env"
    env_file.write_text("")
    monkeypatch.setenv("AWS_ENV_FILE", str(env_file))
    for name in (config.MAXIMUM_EXPANSION_ENV, config.DEADLINE_SECONDS_ENV, config.REGION_ENV):
        monkeypatch.delenv(name, raising=False)
    yield str(env_file)
