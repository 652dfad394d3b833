from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from unixid.core.config import UnixIdConfig


def setup_logging(log_dir: str = "logs", level: str = "INFO", *, file_enabled: bool = True) -> logging.Logger:
    logger = logging.getLogger("unixid")
    logger.setLevel(str(level).strip().upper())
    logger.propagate = False

    if not file_enabled:
        # a later call can turn file output off again
        for h in [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]:
            logger.removeHandler(h)
            h.close()

    if file_enabled and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        os.makedirs(log_dir, exist_ok=True)
        text_path = os.path.join(log_dir, "unixid.log")
        h = RotatingFileHandler(text_path, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
        h.setFormatter(fmt)
        logger.addHandler(h)

    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, RotatingFileHandler) for h in logger.handlers):
        sh = logging.StreamHandler()
        sh.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(sh)

    return logger


def setup_logging_from_config(cfg: "UnixIdConfig") -> logging.Logger:
    lc = cfg.logging
    return setup_logging(lc.log_dir, lc.level, file_enabled=lc.file_enabled)
