"""Render published state for trace logs without leaking secrets.

State is opaque to statecast, so the renderer walks whatever shape the
application publishes: pydantic models, dataclasses, mappings and plain
collections. Values under sensitive-looking keys are masked and long
strings are clipped.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

_MASK = "<redacted>"
_MAX_DEPTH = 20

# Compared after lowercasing and dropping "_" / "-".
_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "passwd",
        "secret",
        "token",
        "accesstoken",
        "refreshtoken",
        "apikey",
        "authorization",
        "cookie",
        "credentials",
    }
)


def _is_sensitive(key: object) -> bool:
    return str(key).lower().replace("_", "").replace("-", "") in _SENSITIVE_KEYS


def _as_mapping(value: Any) -> Mapping[str, Any] | None:
    """Field view of structured state, or ``None`` for anything else."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return value
    return None


def redact_state(value: Any, *, max_string: int = 512) -> Any:
    """Return a log-safe rendering of a published state value."""

    def clip(text: str) -> str:
        return text if len(text) <= max_string else f"{text[:max_string]}…<truncated>"

    def walk(node: Any, depth: int) -> Any:
        if depth > _MAX_DEPTH:
            return "<max-depth>"
        if node is None or isinstance(node, (bool, int, float)):
            return node
        if isinstance(node, str):
            return clip(node)
        if isinstance(node, (bytes, bytearray)):
            return f"<bytes:{len(node)}b>"

        fields = _as_mapping(node)
        if fields is not None:
            return {str(k): _MASK if _is_sensitive(k) else walk(v, depth + 1) for k, v in fields.items()}
        if isinstance(node, (list, tuple, set, frozenset)):
            return [walk(item, depth + 1) for item in node]
        return clip(repr(node))

    return walk(value, 0)
