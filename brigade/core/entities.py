"""Core dispatch types."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from brigade.defaults.config import ANONYMOUS_MIDDLEWARE_NAME


Continuation = Callable[[], Awaitable[Any]]
MiddlewareFn = Callable[[Any, Continuation, Continuation], Awaitable[Any]]


@dataclass(frozen=True)
class NamedMiddleware:
    """A middleware carrying an explicit identifier for error messages."""

    name: str
    middleware: MiddlewareFn

    def __call__(self, request: Any, advance: Continuation, shortcut: Continuation) -> Awaitable[Any]:
        return self.middleware(request, advance, shortcut)


@dataclass
class DispatchState:
    """Bookkeeping owned by exactly one invocation of a composed brigade."""

    cursor: int = 0
    terminated: bool = False
    spent: set[int] = field(default_factory=set)


def named(name: str, middleware: MiddlewareFn) -> NamedMiddleware:
    if not isinstance(name, str) or not name.strip():
        raise ValueError("middleware name must be a non-empty string")
    if not callable(middleware):
        raise TypeError("named() expects a callable middleware")
    return NamedMiddleware(name=name.strip(), middleware=middleware)


def middleware_name(middleware: object, default: str = ANONYMOUS_MIDDLEWARE_NAME) -> str:
    explicit = getattr(middleware, "name", None)
    if isinstance(explicit, str) and explicit:
        return explicit
    fn_name = getattr(middleware, "__name__", None)
    if isinstance(fn_name, str):
        return default if fn_name == "<lambda>" else fn_name
    if middleware is not None and callable(middleware):
        return type(middleware).__name__
    return default
