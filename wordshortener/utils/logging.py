"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once at process startup, before the
Application is built, so the sweep thread logs with the same configuration.

Logging format (one JSON document per line):
{
    "timestamp": "2026-10-17T12:00:00.000Z",
    "level": "INFO",
    "logger": "wordshortener.services.shortener_engine",
    "thread": "shortener-sweep",
    "message": "Reclaimed expired short link.",
    "word": "otter"
}

Records are written to stdout and, when LOG_PATH is set, appended to that file.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from wordshortener.constants import ENV, Defaults


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras and exception tracebacks"""

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'module',
            'msecs',
            'msg',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'thread': record.threadName,
            'message': record.getMessage(),
        }

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None, path: str | None = None) -> None:
    """Configure the root logger with JSON output

    Args:
        level (str | None):
            Log level name. Defaults to LOG_LEVEL, then INFO.
        path (str | None):
            Optional file to append JSON records to. Defaults to LOG_PATH.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL, Defaults.LOG_LEVEL)).upper()
    log_path = path or os.getenv(ENV.App.LOG_PATH)

    handlers = {
        'stdout': {
            'class': 'logging.StreamHandler',
            'formatter': 'json',
            'stream': 'ext://sys.stdout',
        }
    }
    if log_path:
        handlers['file'] = {
            'class': 'logging.FileHandler',
            'formatter': 'json',
            'filename': str(log_path),
            'encoding': 'utf-8',
        }

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': handlers,
            'root': {
                'level': log_level,
                'handlers': list(handlers),
            },
        }
    )
