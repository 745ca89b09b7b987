"""Process-wide logging setup. Modules log through logging.getLogger(__name__)."""
from __future__ import annotations
import logging
import sys
from typing import Optional

from feynman.core import config

_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


def setup_logging(log_level: Optional[str] = None) -> logging.Logger:
    """Attach a single stdout handler to the root logger."""
    level_name = (log_level or config.LOG_LEVEL).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(handler)

    # The OpenAI SDK logs every request at INFO through httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return root_logger
