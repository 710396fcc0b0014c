"""Base class for domain stores.

A :class:`Store` owns a private :class:`~statecast.pubsub.PubSub` and only
forwards the subscriber-facing operations. Subclasses change state through
``_publish``; code holding a store cannot.

Example
-------
>>> class Counter(Store[str, int]):
...     def increment(self) -> int:
...         return self._publish("incremented", lambda prev: prev + 1)
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Generic, TypeVar

from statecast.config import StatecastConfig
from statecast.interfaces import MessageTypes, SubscriptionCallback
from statecast.pubsub import PubSub
from statecast.result import Err, Ok
from statecast.state.container import StateSnapshot

M = TypeVar("M")
S = TypeVar("S")


class Store(Generic[M, S]):
    def __init__(
        self,
        initial_value: S,
        *,
        config: StatecastConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.__engine: PubSub[M, S] = PubSub(
            initial_value,
            config=config,
            clock=clock,
            id_factory=id_factory,
        )

    def subscribe(self, message_types: MessageTypes[M], callback: SubscriptionCallback[S, M]) -> str:
        return self.__engine.subscribe(message_types, callback)

    def unsubscribe(self, subscription_id: str) -> Ok[str] | Err[str]:
        return self.__engine.unsubscribe(subscription_id)

    def get_subscription_count(self) -> int:
        return self.__engine.get_subscription_count()

    # Subclass-only API.

    def _publish(self, message_type: M, next_state: S | Callable[[S], S]) -> int:
        return self.__engine.publish(message_type, next_state)

    def _get_latest_state(self) -> S:
        return self.__engine.get_latest_state()

    def _get_latest_snapshot(self) -> StateSnapshot[S]:
        return self.__engine.get_latest_snapshot()
