# === FILE: privacy_scout/logger.py ===
"""Logger of the ``privacy-scout`` tool.

Every module logs through the same ``"PrivacyScout"`` logger::

    from privacy_scout.logger import logger
    logger.info("Запущен пакет из %d записей", 10)

Output goes to stdout; the CLI may add a rotating log file and change the
level or format through :func:`init_logging`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "PrivacyScout"

# rotation of the optional log file
LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _with_format(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _build_handlers(log_file: str | Path | None, fmt: str) -> list[logging.Handler]:
    handlers = [_with_format(logging.StreamHandler(sys.stdout), fmt)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            filename=str(path),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        handlers.append(_with_format(rotating, fmt))
    return handlers


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Настраивает логгер ``PrivacyScout``.

    Parameters
    ----------
    level
        Уровень логирования, число или имя (``"DEBUG"``).
    log_file
        Файл лога с ротацией; ``None`` - только консоль.
    log_format
        Формат для :class:`logging.Formatter`.
    replace_handlers
        ``True`` закрывает и удаляет прежние обработчики, ``False`` добавляет новые к ним.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()

    for handler in _build_handlers(log_file, log_format):
        lg.addHandler(handler)

    # records must not reach the root logger a second time
    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Used by the CLI at startup; always replaces existing handlers."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
