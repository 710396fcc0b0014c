"""Capability interfaces.

``Subscribable`` is the surface handed to consumers; ``Mutator`` adds the
ability to change state and is meant to stay inside the owning domain type.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol, TypeVar

from statecast.result import Err, Ok

M = TypeVar("M")
S = TypeVar("S")

SubscriptionCallback = Callable[[S, M | None], None]
"""Handler invoked with the new state and the message type that caused it."""

MessageTypes = M | Iterable[M] | None
"""A single message type, a collection of them, or ``None`` for all types."""


class Subscribable(Protocol[M, S]):
    """Public control surface: register, remove and count subscribers."""

    def subscribe(self, message_types: MessageTypes[M], callback: SubscriptionCallback[S, M]) -> str: ...

    def unsubscribe(self, subscription_id: str) -> Ok[str] | Err[str]: ...

    def get_subscription_count(self) -> int: ...


class Mutator(Subscribable[M, S], Protocol[M, S]):
    """Full capability: the public surface plus publishing and reading state."""

    def publish(self, message_type: M, next_state: S | Callable[[S], S]) -> int: ...

    def get_latest_state(self) -> S: ...
