#!/usr/bin/env python3
"""
Plan a bulk S3 to S3 copy.

Checks source objects exist, expands folder wildcards, computes destination
keys, and requests restores for archived objects before the copy runs.

This is a thin wrapper around the s3_copy_planner package.
"""
from __future__ import annotations

from s3_copy_planner.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
