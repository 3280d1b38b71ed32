"""Default constants and configuration values for brigade."""

from .config import ADVANCE, ANONYMOUS_MIDDLEWARE_NAME, DEFAULT_BRIGADE_CONFIG, SHORTCUT

__all__ = ["ADVANCE", "ANONYMOUS_MIDDLEWARE_NAME", "DEFAULT_BRIGADE_CONFIG", "SHORTCUT"]
