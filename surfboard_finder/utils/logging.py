"""
Logging setup for the ``surfboard-finder`` CLI.

``configure_logging(config)`` is called by every CLI command that loads the
catalog, right after the config is read. Engine and ingestion modules only
ever call ``logging.getLogger(__name__)``.

Everything is written to stderr: stdout belongs to the result tables and
to ``find --json``, which must stay parseable. Set ``log_file`` under
``[logging]`` to keep a copy on disk, and ``json_format = true`` for one
JSON object per line, e.g.::

    {"ts": "2026-10-18T09:00:00Z", "level": "WARNING",
     "logger": "surfboard_finder.ingestion.catalog_loader",
     "msg": "Falling back to local sample: ..."}
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from surfboard_finder.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Attributes every LogRecord has; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({})))

# Feed fetches log every request at INFO through these
_CHATTY_LOGGERS = ("httpx", "httpcore")


class _JsonLineFormatter(logging.Formatter):
    """One JSON object per record: ``ts``, ``level``, ``logger``, ``msg``,
    ``exc`` when an exception is attached, plus any ``extra=`` keys."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict = {
            "ts": created.strftime(LOG_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        payload.update(
            (key, val) for key, val in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        return json.dumps(payload, default=str)


def _formatter_for(config: "LoggingConfig") -> logging.Formatter:
    if config.json_format:
        return _JsonLineFormatter()
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    # LOG_DATE_FORMAT ends in Z, so asctime must be UTC
    formatter.converter = time.gmtime
    return formatter


def configure_logging(config: "LoggingConfig") -> None:
    """Point the root logger at stderr (and ``config.log_file`` if set).

    Replaces any handlers installed by an earlier call, so a command can be
    invoked repeatedly in one process (as the CLI tests do).
    """
    level = logging.getLevelName(config.level)
    formatter = _formatter_for(config)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
