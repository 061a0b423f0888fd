"""Logging setup for the bookbot backend.

Every module logs through ``logging.getLogger(__name__)``; this module only
attaches a handler to the ``bookbot`` namespace once, at startup.
"""

from __future__ import annotations

import logging

_LEVEL_ABBREV = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("bookbot")


def configure_logging(level: str = "INFO", debug: bool = False) -> None:
    """Attach a stream handler to the ``bookbot`` logger.

    Format: ``mm-dd HH:MM:SS [LVL] logger.name: message``.
    ``debug=True`` forces DEBUG regardless of ``level``.
    """
    resolved = logging.DEBUG if debug else getattr(logging, (level or "INFO").upper(), logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(
        _AbbrevLevelFormatter(
            fmt="%(asctime)s [%(levelabbr)s] %(name)s: %(message)s",
            datefmt="%m-%d %H:%M:%S",
        )
    )

    log.handlers.clear()
    log.addHandler(handler)
    log.setLevel(resolved)
    log.propagate = False
