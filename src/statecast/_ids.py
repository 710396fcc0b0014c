"""Subscription id generation."""

from __future__ import annotations

import secrets

#: Bytes of entropy per generated id (rendered as twice as many hex chars).
DEFAULT_ID_LENGTH = 16


def generate_id(nbytes: int = DEFAULT_ID_LENGTH) -> str:
    """Return a fresh random uppercase hex identifier."""
    return secrets.token_hex(nbytes).upper()
