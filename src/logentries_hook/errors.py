"""
Errors raised by the Logentries hook.

None of them are retried: a failed event is reported and dropped.
"""

from __future__ import annotations


class LogentriesError(Exception):
    """Base class for every hook failure."""


class CollectorConnectionError(LogentriesError, ConnectionError):
    """The UDP socket to the collector could not be established."""

    def __init__(self, host: str, port: int, reason: BaseException | str) -> None:
        super().__init__(f"Unable to open UDP socket to {host}:{port}: {reason}")
        self.host = host
        self.port = port


class RenderError(LogentriesError):
    """A log record could not be rendered to text."""


class TransmitError(LogentriesError):
    """The datagram write failed or was incomplete."""

    def __init__(self, bytes_written: int, payload_size: int, reason: BaseException | str) -> None:
        super().__init__(
            f"Wrote {bytes_written} of {payload_size} bytes before error: {reason}"
        )
        self.bytes_written = bytes_written
        self.payload_size = payload_size
