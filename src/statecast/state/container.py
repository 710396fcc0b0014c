"""Single-snapshot state container.

The container knows nothing about subscribers; it only computes and stores
the next value. Fan-out lives in :mod:`statecast.pubsub`.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

S = TypeVar("S")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class StateSnapshot(BaseModel, Generic[S]):
    """The current state value and the moment it was last replaced."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: S
    updated_at: datetime = Field(default_factory=_utcnow)


class StateContainer(Generic[S]):
    """Holds exactly one :class:`StateSnapshot` at a time.

    Every mutation builds a new snapshot and swaps it in as a whole, so no
    reader can observe a half-applied update.

    A callable passed to :meth:`mutate` is treated as a producer of the next
    value. To store a value that is itself callable, wrap it:
    ``container.mutate(lambda _prev: handler)``.
    """

    def __init__(
        self,
        initial_value: S,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._clock = clock
        self._snapshot: StateSnapshot[S] = self.initialize(initial_value)

    def initialize(self, value: S) -> StateSnapshot[S]:
        """Build a snapshot for *value* stamped with the current time."""
        return StateSnapshot(value=value, updated_at=self._clock())

    def mutate(self, producer: S | Callable[[S], S]) -> StateSnapshot[S]:
        """Replace the stored snapshot and return the new one.

        Exceptions raised by a producer propagate and leave the stored
        snapshot untouched.
        """
        previous = self._snapshot.value
        value: Any = producer(previous) if callable(producer) else producer
        snapshot: StateSnapshot[S] = StateSnapshot(value=value, updated_at=self._clock())
        self._snapshot = snapshot
        return snapshot

    def read(self) -> S:
        return self._snapshot.value

    @property
    def snapshot(self) -> StateSnapshot[S]:
        return self._snapshot

    @property
    def updated_at(self) -> datetime:
        return self._snapshot.updated_at
