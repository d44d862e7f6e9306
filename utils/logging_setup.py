"""JSON log lines for the desktop client.

Everything goes to stdout; when a log file is given (normally
``<config_dir>/expense-calendar.log``) the same lines are also kept there,
since a windowed launch has no console to read.
"""

import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from utils.constants import SERVICE_NAME

LOG_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"
LOG_FILE_NAME = "expense-calendar.log"
LOG_FILE_BYTES = 1_000_000
LOG_FILE_BACKUPS = 2

# Libraries that log every request at INFO; ApiClient writes its own line
_CHATTY = ("httpx", "httpcore")


class CustomJsonFormatter(JsonFormatter):
    """Adds the record's own UTC time, level and service name."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Route the root logger through the JSON formatter. Safe to call again."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if isinstance(handler.formatter, CustomJsonFormatter):
            handler.close()

    formatter = CustomJsonFormatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_file, maxBytes=LOG_FILE_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8",
        ))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in _CHATTY:
        logging.getLogger(name).setLevel(logging.WARNING)
