"""Package logger, configured once on first import."""
from __future__ import annotations

import logging

from .config import LOG_LEVEL

logger = logging.getLogger("signal_engine")
if not logger.handlers:
    _h = logging.StreamHandler()
    _h.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
    logger.addHandler(_h)
logger.setLevel(LOG_LEVEL)
