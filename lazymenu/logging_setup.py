"""Optional file logging.

The terminal is busy drawing the menu, so log records only go to a file
when one is configured via ``--log-file`` or ``LAZYMENU_LOG``.
"""

from __future__ import annotations

import logging
import os

LOG_ENV_VAR = "LAZYMENU_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(path: str | None = None) -> bool:
    """Attach a DEBUG file handler to the package logger.

    Returns ``False`` when no destination is configured.
    """
    target = path or os.environ.get(LOG_ENV_VAR)
    if not target:
        return False
    handler = logging.FileHandler(target, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("lazymenu")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return True
