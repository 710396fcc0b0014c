"""State layer.

Holds the single current snapshot that the notification engine broadcasts.
"""

from statecast.state.container import StateContainer, StateSnapshot

__all__ = ["StateContainer", "StateSnapshot"]
