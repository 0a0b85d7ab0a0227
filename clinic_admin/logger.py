"""
Structured JSON Logging Module.

Provides a StructuredLogger wrapper that produces logging.Logger instances
emitting one JSON object per line, so sign-in, sign-out and account
creation events can be grepped and shipped as-is.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO, Union


class JSONFormatter(logging.Formatter):
    """Formats log records as structured JSON objects.

    Each entry contains ``timestamp`` (ISO-8601, UTC), ``level``,
    ``logger_name`` and ``message``, plus ``extra`` for caller-supplied
    fields and ``exception`` when a traceback is attached.
    """

    # Attribute names present on every LogRecord; anything else on a
    # record was supplied through ``extra=``.
    _STANDARD_ATTRS: frozenset[str] = frozenset(
        logging.LogRecord(
            name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None
        ).__dict__.keys()
    ) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Union[str, dict[str, str]]] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger_name": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, str] = {
            key: str(value)
            for key, value in record.__dict__.items()
            if key not in self._STANDARD_ATTRS
        }
        if extra_fields:
            entry["extra"] = extra_fields

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            entry["exception"] = record.exc_text

        return json.dumps(entry, ensure_ascii=False)


class StructuredLogger:
    """Injectable logger.

    Instantiate once per subsystem and pass it to whatever needs to log.
    The underlying ``logging.Logger`` is exposed via ``.logger`` and the
    usual level methods are delegated directly.

    Usage::

        log = StructuredLogger(name="directory")
        log.info("Users loaded", extra={"count": "12"})

    Parameters
    ----------
    name:
        Logger name, also used as ``logger_name`` in every JSON line.
    level:
        Minimum level; defaults to the configured ``LOG_LEVEL``.
    stream:
        Console stream (stdout when omitted).
    log_to_file:
        When ``False`` no rotating file handler is attached, regardless
        of ``LOG_FILE``.
    """

    def __init__(
        self,
        name: str = "clinic_admin",
        level: Optional[int] = None,
        stream: Union[TextIO, None] = None,
        log_to_file: bool = True,
    ) -> None:
        # Lazy import to avoid a config <-> logger import cycle.
        from clinic_admin.config import get_config
        cfg = get_config()

        resolved_level: int = level if level is not None else cfg.log_level
        self._logger: logging.Logger = logging.getLogger(name)
        self._logger.setLevel(resolved_level)

        # Reusing a name must not stack duplicate handlers.
        if self._logger.handlers:
            return

        formatter = JSONFormatter()

        stream_handler = logging.StreamHandler(stream or sys.stdout)
        stream_handler.setLevel(resolved_level)
        stream_handler.setFormatter(formatter)
        self._logger.addHandler(stream_handler)

        if not log_to_file or not cfg.LOG_FILE:
            return

        try:
            log_path = Path(cfg.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=str(log_path),
                maxBytes=cfg.LOG_MAX_BYTES,
                backupCount=cfg.LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            self._logger.addHandler(file_handler)
        except OSError as exc:
            self._logger.warning(
                "Could not open log file '%s': %s. "
                "Continuing with console logging only.",
                cfg.LOG_FILE,
                exc,
            )

    @property
    def logger(self) -> logging.Logger:
        """Access the underlying ``logging.Logger`` directly."""
        return self._logger

    def debug(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.critical(msg, *args, **kwargs)


def get_logger(name: str = "clinic_admin") -> StructuredLogger:
    """Create and return a ``StructuredLogger`` with the given *name*."""
    return StructuredLogger(name=name)
