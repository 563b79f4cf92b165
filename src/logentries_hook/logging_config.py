"""
Logging setup helpers.

Purpose:
- Provide a consistent console log format for the process.
- Attach the Logentries handler to the root logger when settings are given.
- Support JSONL console output for easy ingestion by local tools.
"""

from __future__ import annotations

import json
import logging
import time

from .config import HookSettings
from .formatters import record_fields
from .hook import LogentriesHandler, new_logentries_hook


class JsonFormatter(logging.Formatter):
    """
    JSONL formatter for structured logs.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        payload.update(record_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(
    level: str = "INFO",
    *,
    json_output: bool = False,
    settings: HookSettings | None = None,
) -> LogentriesHandler | None:
    """
    Configure root logging and optionally ship records to Logentries.

    Returns the attached LogentriesHandler, or None without settings.
    Raises ValueError for an unknown level before any socket is opened, and
    CollectorConnectionError if the collector cannot be reached.
    """

    if settings is not None:
        level = settings.level
        json_output = settings.json_output
    if not isinstance(logging.getLevelName(level.upper()), int):
        raise ValueError(f"Unknown log level {level!r}.")

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    handlers: list[logging.Handler] = [handler]

    hook = None
    if settings is not None:
        hook = new_logentries_hook(settings.token, host=settings.host, port=settings.port)
        if json_output:
            hook.setFormatter(JsonFormatter())
        handlers.append(hook)

    logging.basicConfig(level=level.upper(), handlers=handlers, force=True)
    return hook
