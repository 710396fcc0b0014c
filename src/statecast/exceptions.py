"""Custom exception hierarchy for statecast."""

from __future__ import annotations


class StatecastError(Exception):
    """Base exception for all statecast errors."""


class StatecastConfigError(StatecastError):
    """Invalid configuration value."""


class ResultUnwrapError(StatecastError):
    """Unwrapped the wrong side of a :class:`~statecast.result.Result`."""


class SubscriptionNotFoundError(ResultUnwrapError):
    """No active subscription matches the requested id.

    ``PubSub.unsubscribe`` never raises this; it reports the miss as an
    ``Err`` result.  The exception is only raised when such an ``Err`` is
    unwrapped.
    """

    def __init__(self, message: str, *, subscription_id: str = "") -> None:
        self.subscription_id = subscription_id
        super().__init__(message)
