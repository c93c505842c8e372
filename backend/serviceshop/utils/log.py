import logging
import sys

from serviceshop.config import settings


def get_logger(name: str, prefix: str = None) -> logging.Logger:
    """
    Return a named logger writing to stdout as "[PREFIX] message".
    Handlers are attached once, so repeated calls are cheap.
    """
    log = logging.getLogger(name)
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        tag = prefix or name.rsplit(".", 1)[-1].upper()
        h.setFormatter(logging.Formatter(f"[{tag}] %(message)s"))
        log.addHandler(h)
        log.propagate = False
    return log
