"""Shared pytest fixtures for test files."""

from __future__ import annotations

import pytest

from tests.s3_test_utils import FakeS3Client

TEST_BUCKET = "working-bucket"
TEST_PREFIX = "unique-test-id"

FILE1 = "a-file-with-decent-name-1.bam"
FILE2 = "file2.bam"
FILE3 = "file3.fastq"
FILE4 = "file4.fastq"
FILE5 = "file5.fastq"
FILE6 = "file6.fastq"

PATH1 = f"{TEST_PREFIX}/{FILE1}"
PATH2 = f"{TEST_PREFIX}/aa/{FILE2}"
PATH3 = f"{TEST_PREFIX}/aa/{FILE3}"
PATH4 = f"{TEST_PREFIX}/bb/{FILE4}"
PATH5 = f"{TEST_PREFIX}/bb/{FILE5}"
PATH6 = f"{TEST_PREFIX}/bb/ccc/{FILE6}"

LOTS_OF_PREFIX = f"{TEST_PREFIX}/lots/of/"
EMPTY_PREFIX = f"{TEST_PREFIX}/none/"


@pytest.fixture(name="s3")
def fixture_s3():
    """Provide an empty in-memory S3 client."""
    return FakeS3Client()


@pytest.fixture(name="populated_s3")
def fixture_populated_s3():
    """A small tree of six objects, ten objects under lots/of/ and an empty folder."""
    client = FakeS3Client()
    client.add(TEST_BUCKET, PATH1, size=1, storage_class="STANDARD_IA")
    client.add(TEST_BUCKET, PATH2, size=2)
    client.add(TEST_BUCKET, PATH3, size=3)
    client.add(TEST_BUCKET, PATH4, size=4, storage_class="DEEP_ARCHIVE")
    client.add(TEST_BUCKET, PATH5, size=5)
    client.add(TEST_BUCKET, PATH6, size=6)
    for i in range(10):
        client.add(TEST_BUCKET, f"{LOTS_OF_PREFIX}{i}.txt", size=1)
    # a folder holding only its own directory marker
    client.add(TEST_BUCKET, EMPTY_PREFIX, size=0)
    return client
