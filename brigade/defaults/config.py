"""Default dispatch constants."""

import logging

ANONYMOUS_MIDDLEWARE_NAME = "<anonymous>"

ADVANCE = "advance"
SHORTCUT = "shortcut"

DEFAULT_BRIGADE_CONFIG = {
    "log_level": logging.WARNING,
}
