"""
S3 client construction.

Credentials are read from a .env file when one provides them, otherwise the
default boto3 credential chain is used.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import boto3
from botocore.config import Config
from dotenv import load_dotenv

from .config import CONNECT_TIMEOUT_SECONDS, MAX_ATTEMPTS, READ_TIMEOUT_SECONDS


def _resolve_env_path(env_path: Optional[str] = None) -> str:
    """
    Determine which .env file should be used for AWS credentials.

    Priority order:
      1. Explicit parameter
      2. AWS_ENV_FILE environment variable
      3. ~/.env
    """
    if env_path:
        return env_path
    aws_env_file = os.environ.get("AWS_ENV_FILE")
    if aws_env_file:
        return aws_env_file
    return str(Path.home() / ".env")


def load_credentials_from_env(env_path: Optional[str] = None) -> Optional[tuple[str, str]]:
    """
    Load AWS credentials from a .env file.

    Args:
        env_path: Optional override path (defaults to AWS_ENV_FILE, then ~/.env)

    Returns:
        tuple: (aws_access_key_id, aws_secret_access_key), or None when the
        file does not define them
    """
    resolved_path = _resolve_env_path(env_path)
    load_dotenv(resolved_path)

    aws_access_key_id = os.getenv("AWS_ACCESS_KEY_ID")
    aws_secret_access_key = os.getenv("AWS_SECRET_ACCESS_KEY")
    if aws_access_key_id and aws_secret_access_key:
        logging.info("AWS credentials loaded from %s", resolved_path)
        return aws_access_key_id, aws_secret_access_key
    logging.debug("No AWS credentials in %s, using the default credential chain", resolved_path)
    return None


def build_client_config(read_timeout: Optional[float] = None) -> Config:
    """Return the botocore config used for every planner client.

    A read timeout derived from a deadline can only tighten the default, never
    loosen it.
    """
    if read_timeout:
        read_timeout = min(read_timeout, READ_TIMEOUT_SECONDS)
    return Config(
        connect_timeout=CONNECT_TIMEOUT_SECONDS,
        read_timeout=read_timeout or READ_TIMEOUT_SECONDS,
        retries={"max_attempts": MAX_ATTEMPTS, "mode": "standard"},
    )


def create_s3_client(
    region: Optional[str] = None,
    env_path: Optional[str] = None,
    read_timeout: Optional[float] = None,
):
    """
    Create an S3 boto3 client.

    Args:
        region: AWS region name (optional)
        env_path: Optional .env file with credentials
        read_timeout: Optional per request read timeout in seconds

    Returns:
        boto3.client: Configured S3 client
    """
    client_kwargs = {"config": build_client_config(read_timeout)}
    credentials = load_credentials_from_env(env_path)
    if credentials is not None:
        client_kwargs["aws_access_key_id"], client_kwargs["aws_secret_access_key"] = credentials
        aws_session_token = os.getenv("AWS_SESSION_TOKEN")
        if aws_session_token:
            client_kwargs["aws_session_token"] = aws_session_token
    if region is not None:
        client_kwargs["region_name"] = region
    return boto3.client("s3", **client_kwargs)
