import logging
import sys

from .config import LOG_LEVEL

_ROOT = "floresta"
_configured = False


def _configure():
    global _configured
    root = logging.getLogger(_ROOT)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)
    root.setLevel(LOG_LEVEL.upper())
    _configured = True


def get_logger(name: str) -> logging.Logger:
    # stdout carries the scoring report, so every handler writes to stderr
    if not _configured:
        _configure()
    return logging.getLogger(f"{_ROOT}.{name}")
