"""Exceptions synthesized by the dispatch protocol.

Anything a middleware or continuation raises on its own is never wrapped in
one of these; it reaches the awaiting caller unchanged.
"""

from __future__ import annotations

from typing import Any


def located_message(position: int, name: str, rule: str) -> str:
    return f"Composed middleware #{position} '{name}' {rule}"


class BrigadeError(Exception):
    """Base exception for brigade."""


class InvalidBrigadeError(BrigadeError, TypeError):
    """Raised synchronously when an argument has the wrong shape."""


class ProtocolViolationError(BrigadeError):
    """Raised when a middleware exercises a continuation more than once."""

    def __init__(self, position: int, name: str, continuation: str) -> None:
        super().__init__(
            located_message(
                position,
                name,
                f"has called its {continuation} continuation after the brigade was terminated "
                "by a prior call to either its advance or its shortcut continuation",
            )
        )
        self.position = position
        self.name = name
        self.continuation = continuation


class NotAwaitableError(BrigadeError, TypeError):
    """Raised when a middleware returns something that cannot be awaited."""

    def __init__(self, position: int, name: str, type_name: str) -> None:
        super().__init__(
            located_message(
                position,
                name,
                f"has returned a value of type '{type_name}' when an awaitable was expected",
            )
        )
        self.position = position
        self.name = name
        self.type_name = type_name


class UnexpectedResultError(BrigadeError):
    """Raised by call_middleware when the chain did not forward its result."""

    def __init__(self, message: str, result: Any = None) -> None:
        super().__init__(message)
        self.result = result
