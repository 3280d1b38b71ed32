"""Composition and invocation entry points."""

from .invoke import call_middleware
from .middleware import ComposedBrigade, MiddlewarePipeline, compose

__all__ = ["ComposedBrigade", "MiddlewarePipeline", "call_middleware", "compose"]
