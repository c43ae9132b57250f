"""Deployment settings read from the process environment.

Each setting is read on every call, so changes to the environment take
effect immediately. A missing variable reads as an empty string.
"""

import os


def _get(name: str) -> str:
    return os.environ.get(name, "")


def region() -> str:
    """The cloud region the mailbox runs in."""
    return _get("REGION")


def table_name() -> str:
    """The name of the table that stores emails and threads."""
    return _get("DYNAMODB_TABLE")


def gsi_original_index_name() -> str:
    """The index keyed by the original Message-ID header."""
    return _get("DYNAMODB_ORIGINAL_INDEX")


def gsi_index_name() -> str:
    """The index keyed by type, year and month."""
    return _get("DYNAMODB_TIME_INDEX")


def s3_bucket() -> str:
    """The bucket holding raw email contents."""
    return _get("S3_BUCKET")


def queue_name() -> str:
    """The queue that receives email notifications; empty disables it."""
    return _get("SQS_QUEUE")


def webhook_url() -> str:
    """The URL that receives webhook calls; empty disables it."""
    return _get("WEBHOOK_URL")