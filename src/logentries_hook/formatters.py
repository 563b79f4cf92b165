"""
Text renderers for log records.

Purpose:
- Render stdlib LogRecords as single logfmt-style lines the collector can
  index (time="..." level=info msg=started key=value).
- Offer a colour mode for consoles, and a colourless path for shipping.

Logic flow:
1) record_fields() extracts structured fields passed through `extra=`.
2) TextFormatter.render() lays out time/level/msg and the fields, either
   plain (key=value) or with ANSI colours.
3) render_plain() renders any TextFormatter with colours forced off, without
   touching the formatter object itself.

Capability tag:
- Renderers that can emit colours set `supports_color = True`, expose a
  `disable_colors` attribute and implement `render(record, *, colors)`. The hook
  checks that tag instead of the renderer's concrete class.
"""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from typing import Any
import json
import logging
import re

from .levels import Severity

ERROR_KEY = "error"

_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

_SAFE_VALUE = re.compile(r"^[A-Za-z0-9\-._/@^+]+$")

_COLOR_RED = 31
_COLOR_YELLOW = 33
_COLOR_BLUE = 36
_COLOR_GRAY = 37


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """
    Return the structured fields attached to a record.

    Fields are any attributes a caller added through `extra=`; the stdlib's
    own LogRecord attributes are skipped. An attached exception is exposed
    under the "error" key unless the caller set one explicitly.
    """

    fields = {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }
    if record.exc_info and record.exc_info[1] is not None and ERROR_KEY not in fields:
        fields[ERROR_KEY] = str(record.exc_info[1])
    return fields


def _level_color(severity: Severity) -> int:
    if severity is Severity.DEBUG:
        return _COLOR_GRAY
    if severity is Severity.WARNING:
        return _COLOR_YELLOW
    if severity >= Severity.ERROR:
        return _COLOR_RED
    return _COLOR_BLUE


class TextFormatter(logging.Formatter):
    """
    logfmt-style formatter with optional ANSI colours.

    Colours are only produced when `force_colors` is set and `disable_colors`
    is not; a formatter cannot see whether its output lands on a terminal.
    """

    supports_color = True

    def __init__(
        self,
        *,
        disable_colors: bool = False,
        force_colors: bool = False,
        disable_timestamp: bool = False,
        full_timestamp: bool = False,
        timestamp_format: str | None = None,
        disable_sorting: bool = False,
        quote_empty_fields: bool = False,
    ) -> None:
        super().__init__()
        self.disable_colors = disable_colors
        self.force_colors = force_colors
        self.disable_timestamp = disable_timestamp
        self.full_timestamp = full_timestamp
        self.timestamp_format = timestamp_format
        self.disable_sorting = disable_sorting
        self.quote_empty_fields = quote_empty_fields

    @property
    def colors_enabled(self) -> bool:
        return self.force_colors and not self.disable_colors

    def format(self, record: logging.LogRecord) -> str:
        return self.render(record, colors=self.colors_enabled)

    def render(self, record: logging.LogRecord, *, colors: bool) -> str:
        """
        Render one record as a single line.

        Raises whatever the record's message interpolation raises (for
        example TypeError on mismatched %-args); callers decide how to
        report it.
        """

        message = record.getMessage()
        fields = record_fields(record)
        keys = list(fields)
        if not self.disable_sorting:
            keys.sort()

        if colors:
            return self._render_colored(record, message, fields, keys)

        parts: list[str] = []
        if not self.disable_timestamp:
            parts.append(self._pair("time", self._timestamp(record)))
        parts.append(self._pair("level", Severity.from_levelno(record.levelno).label))
        if message:
            parts.append(self._pair("msg", message))
        parts.extend(self._pair(key, fields[key]) for key in keys)
        return " ".join(parts)

    def _render_colored(
        self,
        record: logging.LogRecord,
        message: str,
        fields: dict[str, Any],
        keys: list[str],
    ) -> str:
        severity = Severity.from_levelno(record.levelno)
        color = _level_color(severity)
        level_text = severity.name[:4]

        if self.disable_timestamp:
            head = f"\x1b[{color}m{level_text}\x1b[0m {message:<44}"
        elif not self.full_timestamp:
            elapsed = int(record.relativeCreated // 1000)
            head = f"\x1b[{color}m{level_text}\x1b[0m[{elapsed:04d}] {message:<44}"
        else:
            head = f"\x1b[{color}m{level_text}\x1b[0m[{self._timestamp(record)}] {message:<44}"

        tail = "".join(
            f" \x1b[{color}m{key}\x1b[0m={self._value(fields[key])}" for key in keys
        )
        return head + tail

    def _timestamp(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created).astimezone()
        if self.timestamp_format:
            return created.strftime(self.timestamp_format)
        return created.isoformat(timespec="seconds")

    def _pair(self, key: str, value: Any) -> str:
        return f"{key}={self._value(value)}"

    def _value(self, value: Any) -> str:
        text = value if isinstance(value, str) else str(value)
        if self._needs_quoting(text):
            return json.dumps(text, ensure_ascii=False)
        return text

    def _needs_quoting(self, text: str) -> bool:
        if not text:
            return self.quote_empty_fields
        return _SAFE_VALUE.match(text) is None


@lru_cache(maxsize=1)
def _colorless_default() -> TextFormatter:
    return TextFormatter(disable_colors=True)


def render_plain(record: logging.LogRecord, formatter: TextFormatter | None = None) -> str:
    """
    Render a record without colours.

    When a formatter is given its layout options are kept and only colours
    are dropped; the formatter object is not modified.
    """

    return (formatter or _colorless_default()).render(record, colors=False)
