"""Compose and call asynchronous middleware brigades."""

__version__ = "0.1.0"

__all__ = [
    "compose",
    "call_middleware",
    "named",
    "ComposedBrigade",
    "MiddlewarePipeline",
    "NamedMiddleware",
    "BrigadeError",
    "InvalidBrigadeError",
    "NotAwaitableError",
    "ProtocolViolationError",
    "UnexpectedResultError",
]


def __getattr__(name: str) -> object:
    """Lazy exports keep ``import brigade`` free of submodule imports."""
    if name in {"compose", "ComposedBrigade", "MiddlewarePipeline"}:
        from .app.middleware import ComposedBrigade, MiddlewarePipeline, compose

        return {
            "compose": compose,
            "ComposedBrigade": ComposedBrigade,
            "MiddlewarePipeline": MiddlewarePipeline,
        }[name]

    if name == "call_middleware":
        from .app.invoke import call_middleware

        return call_middleware

    if name in {"named", "NamedMiddleware"}:
        from .core.entities import NamedMiddleware, named

        return {"named": named, "NamedMiddleware": NamedMiddleware}[name]

    if name in {
        "BrigadeError",
        "InvalidBrigadeError",
        "NotAwaitableError",
        "ProtocolViolationError",
        "UnexpectedResultError",
    }:
        from .core import errors

        return getattr(errors, name)

    raise AttributeError(f"module 'brigade' has no attribute {name!r}")
