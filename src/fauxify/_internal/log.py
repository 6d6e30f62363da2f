"""Debug tracing for the ``fauxify`` logger namespace."""

import logging
import sys
from typing import TextIO

_PREFIX = "[fauxify] "

logger = logging.getLogger("fauxify")


def enable_debug_logging(stream: TextIO | None = None) -> logging.Handler:
    """Route ``fauxify.*`` DEBUG records to stderr with a ``[fauxify]`` prefix.

    Safe to call more than once; the handler is only attached the first time.
    """
    for handler in logger.handlers:
        if getattr(handler, "_fauxify_debug", False):
            return handler
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_PREFIX + "%(message)s"))
    handler._fauxify_debug = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler
