"""Already-settled awaitables.

Unlike a coroutine these never warn when dropped without being awaited,
which matters for continuations a misbehaving middleware discards.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Resolved(Generic[T]):
    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def __await__(self) -> Generator[Any, None, T]:
        yield from ()
        return self.value

    def __repr__(self) -> str:
        return f"Resolved({self.value!r})"


class Rejected:
    __slots__ = ("error",)

    def __init__(self, error: BaseException) -> None:
        self.error = error

    def __await__(self) -> Generator[Any, None, Any]:
        yield from ()
        raise self.error

    def __repr__(self) -> str:
        return f"Rejected({self.error!r})"


def resolved(value: T) -> Resolved[T]:
    return Resolved(value)


def rejected(error: BaseException) -> Rejected:
    return Rejected(error)
