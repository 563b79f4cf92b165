"""
Logging handler that ships records to Logentries over UDP.

Purpose:
- Forward every record the host logger produces to the Logentries
  collector as one datagram: "<token> <rendered line>".
- Keep the handler's failure modes explicit (connection, render, transmit).

Sources:
- token: supplied by the caller, usually resolved in config.py from
  LOGENTRIES_TOKEN. It is opaque and not validated.
- host/port: the fixed collector endpoint unless overridden.

Logic flow:
1) The constructor resolves the collector and connects a UDP socket. If that
   fails no handler exists (CollectorConnectionError).
2) logging calls handle() -> emit() for each record at or above DEBUG.
3) emit() delegates to fire(), which renders the record, prefixes the token
   and sends a single datagram.
4) Failures are written to stderr and raised from fire(); emit() hands them
   to Handler.handleError like any other stdlib handler.
"""

from __future__ import annotations

from typing import Any
import logging
import socket
import sys

from .errors import CollectorConnectionError, RenderError, TransmitError
from .formatters import TextFormatter, render_plain
from .levels import ALL_SEVERITIES, Severity

DEFAULT_HOST = "data.logentries.com"
DEFAULT_PORT = 10000
MAX_PORT = 65535


def _open_udp_socket(host: str, port: int) -> socket.socket:
    # UDP connect() only fixes the peer address; nothing is sent.
    if not isinstance(port, int) or not 0 <= port <= MAX_PORT:
        raise CollectorConnectionError(host, port, f"port must be an integer in 0-{MAX_PORT}")
    try:
        candidates = socket.getaddrinfo(host, port, 0, socket.SOCK_DGRAM)
    except (OSError, OverflowError, ValueError) as exc:
        raise CollectorConnectionError(host, port, exc) from exc

    last_error: Exception | None = None
    for family, socktype, proto, _, address in candidates:
        sock = None
        try:
            sock = socket.socket(family, socktype, proto)
            sock.connect(address)
        except (OSError, OverflowError, ValueError) as exc:
            last_error = exc
            if sock is not None:
                sock.close()
            continue
        return sock

    raise CollectorConnectionError(host, port, last_error or "no usable address")


def _supports_color(formatter: Any) -> bool:
    return bool(getattr(formatter, "supports_color", False))


class LogentriesHandler(logging.Handler):
    """
    Handler subscribed to every severity, writing one datagram per record.
    """

    def __init__(self, token: str, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
        # Open the socket first so a failed construction never registers a handler.
        sock = _open_udp_socket(host, port)
        super().__init__(level=int(min(ALL_SEVERITIES)))
        self.token = token
        self.host = host
        self.port = port
        self._sock = sock
        self.setFormatter(TextFormatter(disable_colors=True))

    def levels(self) -> frozenset[Severity]:
        return ALL_SEVERITIES

    def setFormatter(self, fmt: logging.Formatter | None) -> None:
        """
        Store the renderer, forcing colours off on colour-capable ones.
        """

        super().setFormatter(fmt)
        if _supports_color(fmt):
            fmt.disable_colors = True

    def fire(self, record: logging.LogRecord, formatter: logging.Formatter | None = None) -> None:
        """
        Render one record and send it as a single datagram.

        Inputs:
        - record: the LogRecord produced by the host logger.
        - formatter: the host pipeline's active renderer; defaults to the
          handler's own formatter. It is only read, never modified.
          Colour-capable renderers are rendered through render_plain(), so the
          shipped line keeps their layout options (timestamp, sorting, quoting)
          and only drops the colours.

        Raises:
        - RenderError if the record cannot be rendered (nothing is sent).
        - TransmitError if the send fails or is short (no retry).
        """

        with self.lock:
            active = formatter if formatter is not None else self.formatter
            try:
                if active is None or _supports_color(active):
                    line = render_plain(record, active)
                else:
                    line = active.format(record)
            except Exception as exc:
                self._report(f"Failed to generate string for entry: {exc}")
                raise RenderError(f"Failed to generate string for entry: {exc}") from exc

            # Lone surrogates (ex: surrogateescape-decoded paths) are backslash-escaped.
            payload = f"{self.token} {line}".encode("utf-8", errors="backslashreplace")
            try:
                written = self._sock.send(payload)
            except OSError as exc:
                self._report(
                    "Unable to send log line to Logentries via UDP. "
                    f"Wrote 0 bytes before error: {exc}"
                )
                raise TransmitError(0, len(payload), exc) from exc

            if written < len(payload):
                self._report(
                    "Unable to send log line to Logentries via UDP. "
                    f"Wrote {written} bytes before error: short write"
                )
                raise TransmitError(written, len(payload), "short write")

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.fire(record)
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        with self.lock:
            self._sock.close()
        super().close()

    @staticmethod
    def _report(message: str) -> None:
        sys.stderr.write(message + "\n")


def new_logentries_hook(token: str, *, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> LogentriesHandler:
    """
    Create a handler to be added to a logger.

    Raises CollectorConnectionError when the UDP socket cannot be opened.
    """

    return LogentriesHandler(token, host=host, port=port)
