"""src/popyramid/common/logging.py"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from popyramid.common.config import AppConfig

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# engine libraries pandas calls into for spreadsheets
QUIET_LOGGERS = ("openpyxl", "xlrd")


def _level(value: object, default: int = logging.INFO) -> int:
    return getattr(logging, str(value).upper(), default)


def _file_handler(cfg: AppConfig, level: int) -> logging.Handler | None:
    log_file = cfg.logging.get("file")
    if not log_file:
        return None
    path = (cfg.project_root / Path(log_file)).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=int(cfg.logging.get("max_bytes", 2_000_000)),
        backupCount=int(cfg.logging.get("backup_count", 3)),
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_logging(cfg: AppConfig) -> None:
    """
    Configure the root logger from the `logging` config section.

    Keys: level (INFO), file (relative to the project root; omit for console
    only), max_bytes, backup_count.
    """
    level = _level(cfg.logging.get("level", "INFO"))

    console = logging.StreamHandler()
    console.setLevel(level)
    handlers: list[logging.Handler] = [console]

    file_handler = _file_handler(cfg, level)
    if file_handler is not None:
        handlers.append(file_handler)

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
