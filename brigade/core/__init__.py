from .awaitables import rejected, resolved
from .entities import DispatchState, NamedMiddleware, middleware_name, named
from .errors import (
    BrigadeError,
    InvalidBrigadeError,
    NotAwaitableError,
    ProtocolViolationError,
    UnexpectedResultError,
)

__all__ = [
    "rejected",
    "resolved",
    "DispatchState",
    "NamedMiddleware",
    "middleware_name",
    "named",
    "BrigadeError",
    "InvalidBrigadeError",
    "NotAwaitableError",
    "ProtocolViolationError",
    "UnexpectedResultError",
]
