"""Identifier and timestamp helpers."""

import time
import uuid


def new_id() -> str:
    """Random 128-bit identifier as 32 hex characters."""
    return uuid.uuid4().hex


def now_millis() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)
