"""Run a single middleware or composed brigade against a fixed response."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable
from typing import Any

from brigade.core.awaitables import resolved
from brigade.core.entities import Continuation, MiddlewareFn, middleware_name
from brigade.core.errors import InvalidBrigadeError, NotAwaitableError, UnexpectedResultError


class _Omitted:
    def __repr__(self) -> str:
        return "<omitted>"


OMITTED: Any = _Omitted()


def call_middleware(middleware: MiddlewareFn, request: Any, response: Any = OMITTED) -> Awaitable[Any]:
    """Invoke ``middleware`` with both continuations resolving to ``response``.

    With a ``response`` the result must be that very object, which proves
    every middleware forwarded the value its continuation produced. Without
    one the result only has to be something other than ``None``.
    """
    if not callable(middleware):
        raise InvalidBrigadeError("middleware must be callable")
    if request is None:
        raise InvalidBrigadeError("request must not be None")
    if response is None:
        raise InvalidBrigadeError("response must not be None when supplied")

    expected = None if response is OMITTED else response

    def terminate(*_: Any, **__: Any) -> Awaitable[Any]:
        return resolved(expected)

    return _invoke(middleware, request, terminate, response)


async def _invoke(middleware: MiddlewareFn, request: Any, terminate: Continuation, response: Any) -> Any:
    pending = middleware(request, terminate, terminate)
    if not inspect.isawaitable(pending):
        raise NotAwaitableError(0, middleware_name(middleware), type(pending).__name__)
    result = await pending

    if response is OMITTED:
        if result is None:
            raise UnexpectedResultError(
                "Middleware brigade result cannot be None; a middleware function likely failed to "
                "return the value produced by its advance or shortcut continuation",
                result,
            )
        return result
    if result is not response:
        raise UnexpectedResultError(
            "Middleware brigade terminated with an unexpected response value indicating that a "
            "middleware function failed to call advance or shortcut, or failed to incorporate "
            "the resulting value into its own return value",
            result,
        )
    return result
