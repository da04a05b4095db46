"""Logging configuration for the app and the persistence layer."""

import logging
import sys

from workbench.config import get_log_level

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def setup_logging(level: str = None) -> logging.Logger:
    """Attach a stderr handler to the ``workbench`` logger (once).

    Level comes from ``level`` or ``WORKBENCH_LOG_LEVEL`` (default INFO).
    """
    global _configured
    root = logging.getLogger('workbench')
    level_name = (level or get_log_level()).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        _configured = True
    return root
