from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: Optional[str] = None, force: bool = False) -> None:
    """Configure root logging once.

    The level comes from ``level``, then the LOG_LEVEL environment variable,
    then INFO. ``force`` reconfigures, which the CLI uses for --log-level.
    """
    global _configured
    if _configured and not force:
        return

    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        force=force,
    )
    _configured = True


def get_logger(name: str) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
