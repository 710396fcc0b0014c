"""statecast - in-process publish/subscribe over a versioned state value."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("statecast")
except PackageNotFoundError:
    __version__ = "0+local"
from statecast.config import StatecastConfig
from statecast.exceptions import (
    ResultUnwrapError,
    StatecastConfigError,
    StatecastError,
    SubscriptionNotFoundError,
)
from statecast.interfaces import Mutator, Subscribable, SubscriptionCallback
from statecast.pubsub import PubSub, Subscription, SubscriptionNotFound
from statecast.result import Err, Ok, Result
from statecast.state import StateContainer, StateSnapshot
from statecast.store import Store

__all__ = [
    "__version__",
    "Err",
    "Mutator",
    "Ok",
    "PubSub",
    "Result",
    "ResultUnwrapError",
    "StateContainer",
    "StateSnapshot",
    "StatecastConfig",
    "StatecastConfigError",
    "StatecastError",
    "Store",
    "Subscribable",
    "Subscription",
    "SubscriptionCallback",
    "SubscriptionNotFound",
    "SubscriptionNotFoundError",
]
