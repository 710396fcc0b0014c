"""Engine configuration for statecast."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from statecast._ids import DEFAULT_ID_LENGTH
from statecast.exceptions import StatecastConfigError

# Anything shorter makes collisions plausible within one process lifetime.
_MIN_ID_LENGTH = 8


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise StatecastConfigError(f"{env_key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class StatecastConfig:
    """Engine configuration.

    Parameters
    ----------
    trace_enabled : bool
        Log every fan-out at DEBUG level, including a redacted rendering
        of the published state.
    log_max_string : int
        Strings longer than this are truncated in trace logs.
    id_length : int
        Bytes of entropy in generated subscription ids.
    """

    trace_enabled: bool = False
    log_max_string: int = 512
    id_length: int = DEFAULT_ID_LENGTH

    def __post_init__(self) -> None:
        if self.log_max_string < 1:
            raise StatecastConfigError("log_max_string must be positive")
        if self.id_length < _MIN_ID_LENGTH:
            raise StatecastConfigError(f"id_length must be at least {_MIN_ID_LENGTH}")

    @classmethod
    def from_env(cls, **overrides: Any) -> StatecastConfig:
        """Create configuration from environment variables.

        Reads ``STATECAST_TRACE_ENABLED``, ``STATECAST_LOG_MAX_STRING`` and
        ``STATECAST_ID_LENGTH``. Explicit keyword arguments override
        environment values.

        Raises
        ------
        StatecastConfigError
            If a numeric variable cannot be parsed or is out of range.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        if "trace_enabled" not in overrides:
            config_kwargs["trace_enabled"] = _env_bool(env.get("STATECAST_TRACE_ENABLED"), False)

        _ENV_INT_MAP = {
            "STATECAST_LOG_MAX_STRING": "log_max_string",
            "STATECAST_ID_LENGTH": "id_length",
        }
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_int(env_key, val)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
