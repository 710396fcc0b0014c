"""Result values for fallible operations that report instead of raising.

``PubSub.unsubscribe`` returns one of these so that a missing id is an
ordinary, checkable outcome rather than an exception.
"""

from __future__ import annotations

from typing import Generic, Literal, NoReturn, TypeVar

from pydantic import BaseModel, ConfigDict

from statecast.exceptions import ResultUnwrapError

T = TypeVar("T")
E = TypeVar("E")


class Ok(BaseModel, Generic[T]):
    """Successful outcome carrying ``value``."""

    model_config = ConfigDict(frozen=True)

    value: T

    def is_ok(self) -> Literal[True]:
        return True

    def is_err(self) -> Literal[False]:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise ResultUnwrapError(f"Called unwrap_err on Ok({self.value!r})")


class Err(BaseModel, Generic[E]):
    """Failed outcome carrying ``error``."""

    model_config = ConfigDict(frozen=True)

    error: E

    def is_ok(self) -> Literal[False]:
        return False

    def is_err(self) -> Literal[True]:
        return True

    def unwrap(self) -> NoReturn:
        raise ResultUnwrapError(f"Called unwrap on Err({self.error!r})")

    def unwrap_err(self) -> E:
        return self.error


#: Either side of a result; usable with ``isinstance``.
Result = Ok | Err
