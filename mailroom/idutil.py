"""Identifier generation."""

import uuid


def generate_thread_id() -> str:
    """Return a new random thread identifier: a UUID4 without dashes."""
    return uuid.uuid4().hex