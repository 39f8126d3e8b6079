"""
Logging setup for the command line apps.

Library modules only create loggers (logging.getLogger(__name__)); the apps
call setup_logging once. A log file, when given, is appended to so the
history of many sessions stays in one place.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        p = Path(log_file)
        p.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(p, mode="a", encoding="utf-8")
        # the file keeps per-round detail regardless of console verbosity
        fh.setLevel(logging.DEBUG)
        handlers.append(fh)
    handlers[0].setLevel(level.upper())

    logging.basicConfig(level=logging.DEBUG if log_file else level.upper(),
                        format=LOG_FORMAT, handlers=handlers, force=True)
