"""Subscription and synchronous fan-out engine.

:class:`PubSub` pairs a :class:`~statecast.state.container.StateContainer`
with an ordered list of subscriptions. ``publish`` replaces the state and
then calls every matching subscriber in registration order before it
returns.

Subscriber exceptions are deliberately not contained: the first failing
callback aborts the rest of that fan-out and the exception reaches the
caller of ``publish`` unchanged.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import types
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any, Generic, NoReturn, TypeVar

from statecast._ids import generate_id
from statecast._redact import redact_state
from statecast.config import StatecastConfig
from statecast.interfaces import MessageTypes, SubscriptionCallback
from statecast.exceptions import SubscriptionNotFoundError
from statecast.result import Err, Ok
from statecast.state.container import StateContainer, StateSnapshot

_logger = logging.getLogger(__name__)

M = TypeVar("M")
S = TypeVar("S")

_COLLECTION_TYPES: frozenset[type] = frozenset({list, tuple, set, frozenset})


def _normalize_message_types(message_types: Any) -> tuple[Any, ...]:
    """Turn the ``subscribe`` argument into an ordered, de-duplicated tuple.

    ``None``, ``""`` and empty collections yield ``()`` (match everything).
    Only plain ``list``, ``tuple``, ``set`` and ``frozenset`` values and
    ``Enum`` classes are expanded; anything else, including models and
    named tuples, is a single message type. A plain tuple used as a message
    type must be wrapped in a list.
    """
    if message_types is None:
        return ()
    if isinstance(message_types, enum.EnumMeta):
        items: Iterable[Any] = list(message_types)
    elif type(message_types) in _COLLECTION_TYPES:
        items = message_types
    elif isinstance(message_types, (str, bytes)) and not message_types:
        return ()
    else:
        return (message_types,)

    # Equality-based dedup so unhashable message types are accepted too.
    unique: list[Any] = []
    for item in items:
        if item not in unique:
            unique.append(item)
    return tuple(unique)


def _same_callback(registered: Callable[..., Any], candidate: Callable[..., Any]) -> bool:
    """Identity comparison that treats re-bound methods of one instance as equal.

    ``obj.handler`` builds a new bound-method object on every access; two of
    them compare equal when both the function and ``obj`` are identical.
    """
    if registered is candidate:
        return True
    if isinstance(registered, types.MethodType) and isinstance(candidate, types.MethodType):
        return registered.__func__ is candidate.__func__ and registered.__self__ is candidate.__self__
    return False


class SubscriptionNotFound(Err[str]):
    """``unsubscribe`` miss; unwrapping raises :class:`SubscriptionNotFoundError`."""

    subscription_id: str

    def unwrap(self) -> NoReturn:
        raise SubscriptionNotFoundError(self.error, subscription_id=self.subscription_id)


@dataclasses.dataclass(frozen=True)
class Subscription(Generic[M, S]):
    """A registered callback and the message types it listens to.

    An empty ``message_types`` tuple means the callback receives every
    publish.
    """

    id: str
    callback: SubscriptionCallback[S, M]
    message_types: tuple[M, ...] = ()

    @property
    def is_wildcard(self) -> bool:
        return not self.message_types

    def matches(self, message_type: M) -> bool:
        if self.is_wildcard:
            return True
        return message_type in self.message_types


class PubSub(Generic[M, S]):
    """In-process publish/subscribe over a single versioned state value.

    Not thread-safe; share an instance across threads only behind external
    locking.

    Parameters
    ----------
    initial_value
        The state value held before the first publish.
    config : StatecastConfig, optional
        Logging and id settings. Defaults to ``StatecastConfig()``.
    clock : callable, optional
        Returns the timestamp stored with each snapshot. Defaults to UTC now.
    id_factory : callable, optional
        Returns a fresh subscription id. Defaults to random hex ids sized by
        ``config.id_length``.
    """

    def __init__(
        self,
        initial_value: S,
        *,
        config: StatecastConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._config = config or StatecastConfig()
        self._state: StateContainer[S] = (
            StateContainer(initial_value, clock=clock) if clock is not None else StateContainer(initial_value)
        )
        self._subscriptions: list[Subscription[M, S]] = []
        self._id_factory = id_factory or (lambda: generate_id(self._config.id_length))

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(subscriptions={len(self._subscriptions)})"

    @property
    def config(self) -> StatecastConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public control surface
    # ------------------------------------------------------------------

    def subscribe(self, message_types: MessageTypes[M], callback: SubscriptionCallback[S, M]) -> str:
        """Register *callback* and return its subscription id.

        Subscribing a callback that is already registered (same object, by
        identity) returns the existing id and keeps the first interest
        set.
        """
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")

        existing = self._find_by_callback(callback)
        if existing is not None:
            _logger.debug("Callback already subscribed as id=%s", existing.id)
            return existing.id

        subscription: Subscription[M, S] = Subscription(
            id=self._id_factory(),
            callback=callback,
            message_types=_normalize_message_types(message_types),
        )
        self._subscriptions.append(subscription)
        _logger.debug(
            "Subscribed id=%s message_types=%s total=%d",
            subscription.id,
            list(subscription.message_types) or "*",
            len(self._subscriptions),
        )
        return subscription.id

    def unsubscribe(self, subscription_id: str) -> Ok[str] | SubscriptionNotFound:
        """Remove the subscription with *subscription_id*.

        Returns ``Ok("Unsubscribed")`` on success, or an ``Err`` naming the
        id when nothing matches. Never raises for an unknown id.
        """
        for index, subscription in enumerate(self._subscriptions):
            if subscription.id == subscription_id:
                del self._subscriptions[index]
                _logger.debug("Unsubscribed id=%s total=%d", subscription_id, len(self._subscriptions))
                return Ok(value="Unsubscribed")

        _logger.debug("Unsubscribe miss for id=%s", subscription_id)
        return SubscriptionNotFound(error=f"Subscription {subscription_id} not found", subscription_id=subscription_id)

    def get_subscription_count(self) -> int:
        return len(self._subscriptions)

    def get_subscription_id(self, callback: SubscriptionCallback[S, M]) -> Ok[str] | Err[str]:
        """Look up the id under which *callback* is registered."""
        existing = self._find_by_callback(callback)
        if existing is None:
            return Err(error="Subscription not found")
        return Ok(value=existing.id)

    def is_subscribed(self, callback: SubscriptionCallback[S, M]) -> bool:
        return self._find_by_callback(callback) is not None

    # ------------------------------------------------------------------
    # Mutator capability
    # ------------------------------------------------------------------

    def publish(self, message_type: M, next_state: S | Callable[[S], S]) -> int:
        """Replace the state and notify matching subscribers in order.

        *next_state* is either the new value or a function of the previous
        value. Returns the number of active subscriptions, not the number of
        callbacks invoked.
        """
        snapshot = self._state.mutate(next_state)

        # Iterate a copy: subscribe/unsubscribe calls made by callbacks take
        # effect from the next publish on.
        subscriptions = list(self._subscriptions)

        if self._config.trace_enabled:
            _logger.debug(
                "Publishing %r to %d subscriptions state=%s",
                message_type,
                len(subscriptions),
                redact_state(snapshot.value, max_string=self._config.log_max_string),
            )

        notified = 0
        for subscription in subscriptions:
            if not subscription.matches(message_type):
                continue
            try:
                subscription.callback(snapshot.value, message_type)
            except Exception as exc:
                # The traceback travels with the re-raised exception.
                _logger.debug(
                    "Subscriber id=%s failed on %r (%s: %s); aborting fan-out",
                    subscription.id,
                    message_type,
                    type(exc).__name__,
                    exc,
                )
                raise
            notified += 1

        if self._config.trace_enabled:
            _logger.debug("Published %r; notified=%d", message_type, notified)

        return len(self._subscriptions)

    def get_latest_state(self) -> S:
        return self._state.read()

    def get_latest_snapshot(self) -> StateSnapshot[S]:
        return self._state.snapshot

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find_by_callback(self, callback: SubscriptionCallback[S, M]) -> Subscription[M, S] | None:
        for subscription in self._subscriptions:
            if _same_callback(subscription.callback, callback):
                return subscription
        return None
