"""
Logentries hook for the standard logging package.

The package is intentionally small: one handler that ships records over UDP,
the renderers it uses, and the config/logging helpers that wire it up.
Import paths are exported here to keep the public surface area obvious.
"""

from .errors import (
    CollectorConnectionError,
    LogentriesError,
    RenderError,
    TransmitError,
)
from .levels import ALL_SEVERITIES, Severity
from .formatters import TextFormatter, record_fields, render_plain
from .hook import DEFAULT_HOST, DEFAULT_PORT, LogentriesHandler, new_logentries_hook
from .config import HookSettings, load_settings
from .logging_config import JsonFormatter, setup_logging

__all__ = [
    "CollectorConnectionError",
    "LogentriesError",
    "RenderError",
    "TransmitError",
    "ALL_SEVERITIES",
    "Severity",
    "TextFormatter",
    "record_fields",
    "render_plain",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "LogentriesHandler",
    "new_logentries_hook",
    "HookSettings",
    "load_settings",
    "JsonFormatter",
    "setup_logging",
]
