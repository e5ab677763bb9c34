from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from typing import Optional, Union

from config.repository import repository_settings


class LaravelFormatter(logging.Formatter):
    """Laravel-style log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        log_line = f"[{timestamp}] {record.name}.{record.levelname}: {record.getMessage()}"

        context = getattr(record, 'context', {})
        if context:
            log_line += f" {json.dumps(context, default=str)}"

        if record.exc_info:
            log_line += f"\n{self.formatException(record.exc_info)}"

        return log_line


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'channel': record.name,
            'message': record.getMessage(),
            'context': getattr(record, 'context', {}),
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_logging(level: Optional[Union[str, int]] = None, stream: Optional[object] = None) -> logging.Handler:
    """
    Attach a handler for repository logs to the root logger.

    Repository components log under their class names, so the handler goes on
    the root logger. Level and format default to the repository settings.
    """
    handler = logging.StreamHandler(stream or sys.stderr)  # type: ignore[arg-type]
    if repository_settings.LOG_FORMAT == 'json':
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(LaravelFormatter())

    root = logging.getLogger()
    root.setLevel(level if level is not None else repository_settings.LOG_LEVEL)
    root.addHandler(handler)
    return handler
