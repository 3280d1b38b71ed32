"""Middleware brigade composition and dispatch.

A brigade is an ordered sequence of middleware. Composing it yields a single
callable with the same ``(request, advance, shortcut)`` signature as its
members, so composed brigades nest inside other brigades.

Every middleware must exercise exactly one of its two continuations, exactly
once, and return the awaitable that continuation produced (possibly after
transforming its value). Continuations do all of their bookkeeping
synchronously at call time, so a middleware calling ``advance(); return
advance()`` is caught even though nothing has been awaited yet.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from functools import partial
from typing import Any

from brigade.core.awaitables import rejected, resolved
from brigade.core.entities import Continuation, DispatchState, MiddlewareFn, middleware_name, named
from brigade.core.errors import InvalidBrigadeError, NotAwaitableError, ProtocolViolationError
from brigade.defaults.config import ADVANCE, ANONYMOUS_MIDDLEWARE_NAME, SHORTCUT

logger = logging.getLogger(__name__)

HandlerFn = Callable[[Any], Awaitable[Any]]


class _Dispatch:
    """One in-flight invocation of a composed brigade."""

    def __init__(
        self,
        composed: "ComposedBrigade",
        request: Any,
        outer_advance: Continuation,
        outer_shortcut: Continuation,
    ) -> None:
        self.composed = composed
        self.request = request
        self.outer_advance = outer_advance
        self.outer_shortcut = outer_shortcut
        self.state = DispatchState()

    def dispatch(self, position: int) -> Awaitable[Any]:
        brigade = self.composed.brigade
        self.state.cursor = position
        try:
            if position < len(brigade):
                result = brigade[position](
                    self.request,
                    partial(self.advance, position),
                    partial(self.shortcut, position),
                )
            else:
                self.state.terminated = True
                logger.debug(
                    "brigade %s ran to completion after %d middleware",
                    self.composed.label,
                    len(brigade),
                    extra={"brigade": self.composed.label, "continuation": ADVANCE},
                )
                result = self.outer_advance()
        except Exception as exc:
            return rejected(exc)

        if inspect.isawaitable(result):
            return result
        return rejected(
            NotAwaitableError(position, self.composed.name_at(position), type(result).__name__)
        )

    def advance(self, position: int) -> Awaitable[Any]:
        self._claim(position, ADVANCE)
        return self.dispatch(position + 1)

    def shortcut(self, position: int) -> Awaitable[Any]:
        self._claim(position, SHORTCUT)
        self.state.terminated = True
        logger.debug(
            "brigade %s shortcut at #%d",
            self.composed.label,
            position,
            extra={"brigade": self.composed.label, "position": position, "continuation": SHORTCUT},
        )
        return self.outer_shortcut()

    def _claim(self, position: int, continuation: str) -> None:
        if self.state.terminated or position in self.state.spent:
            name = self.composed.name_at(position)
            logger.debug(
                "middleware #%d %s misused its %s continuation",
                position,
                name,
                continuation,
                extra={
                    "brigade": self.composed.label,
                    "position": position,
                    "middleware": name,
                    "continuation": continuation,
                },
            )
            raise ProtocolViolationError(position, name, continuation)
        self.state.spent.add(position)


class ComposedBrigade:
    """Callable produced by :func:`compose`."""

    def __init__(self, brigade: Sequence[MiddlewareFn], name: str | None = None) -> None:
        self._brigade: tuple[MiddlewareFn, ...] = tuple(brigade)
        self.name = name

    @property
    def brigade(self) -> tuple[MiddlewareFn, ...]:
        return self._brigade

    @property
    def label(self) -> str:
        return self.name or ANONYMOUS_MIDDLEWARE_NAME

    def __len__(self) -> int:
        return len(self._brigade)

    def __repr__(self) -> str:
        names = ", ".join(middleware_name(mw) for mw in self._brigade)
        return f"ComposedBrigade({self.label!r}, [{names}])"

    def name_at(self, position: int) -> str:
        if 0 <= position < len(self._brigade):
            return middleware_name(self._brigade[position])
        return ANONYMOUS_MIDDLEWARE_NAME

    def __call__(self, request: Any, advance: Continuation, shortcut: Continuation) -> Awaitable[Any]:
        if not callable(advance):
            raise InvalidBrigadeError("advance parameter to composed middleware must be callable")
        if not callable(shortcut):
            raise InvalidBrigadeError("shortcut parameter to composed middleware must be callable")
        return self._settle(_Dispatch(self, request, advance, shortcut).dispatch(0))

    @staticmethod
    async def _settle(pending: Awaitable[Any]) -> Any:
        return await pending


def compose(brigade: Sequence[MiddlewareFn], name: str | None = None) -> ComposedBrigade:
    """Compose a brigade of middleware into one middleware."""
    if isinstance(brigade, (str, bytes)) or not isinstance(brigade, Sequence):
        raise InvalidBrigadeError("Middleware brigade must be a list or tuple")
    if not all(callable(mw) for mw in brigade):
        raise InvalidBrigadeError("Middleware brigade must be composed of callables")
    composed = ComposedBrigade(brigade, name=name)
    logger.debug("composed brigade %s of %d middleware", composed.label, len(composed))
    return composed


class MiddlewarePipeline:
    """Incrementally built brigade."""

    def __init__(self) -> None:
        self._stack: list[MiddlewareFn] = []

    def add(self, middleware: MiddlewareFn, name: str | None = None) -> MiddlewareFn:
        if not callable(middleware):
            raise InvalidBrigadeError("Middleware must be callable")
        self._stack.append(named(name, middleware) if name is not None else middleware)
        return middleware

    use = add

    def __len__(self) -> int:
        return len(self._stack)

    def compose(self, name: str | None = None) -> ComposedBrigade:
        return compose(self._stack, name=name)

    async def run(
        self,
        request: Any,
        final_handler: HandlerFn,
        shortcut_handler: HandlerFn | None = None,
    ) -> Any:
        """Run the stack, ending in ``final_handler`` unless a middleware shortcuts.

        A shortcut resolves to ``shortcut_handler(request)``, or to ``None``
        when no shortcut handler is given.
        """

        def finish() -> Awaitable[Any]:
            return final_handler(request)

        def skip() -> Awaitable[Any]:
            if shortcut_handler is None:
                return resolved(None)
            return shortcut_handler(request)

        return await self.compose()(request, finish, skip)
