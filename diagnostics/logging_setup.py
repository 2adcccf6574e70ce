from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

LOGGER_NAME = "navdeck"
_CONFIGURED = False
_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"


def configure_logging(base_dir: Optional[Path] = None, *, level: int = logging.INFO) -> Dict[str, str]:
    """Attach the file handler to the ``navdeck`` logger (idempotent)."""
    global _CONFIGURED
    root = base_dir or Path("data/roaming")
    log_dir = root / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / "navdeck.log"

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    if base_dir is None and not _CONFIGURED:
        logger.addHandler(_file_handler(log_path))
        _CONFIGURED = True
    elif base_dir is not None and not any(
        isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_path.absolute()
        for h in logger.handlers
    ):
        logger.addHandler(_file_handler(log_path))

    return {
        "log_path": str(log_path),
        "format": "kv",
        "handlers": "file",
        "logger_name": LOGGER_NAME,
    }


def _file_handler(log_path: Path) -> logging.Handler:
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FORMAT))
    return handler
