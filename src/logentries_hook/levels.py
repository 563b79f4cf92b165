"""
Severity levels the hook subscribes to.

The collector expects the six classic severities (panic down to debug).
Python's logging package only knows five, so PANIC is registered as an
extra level above CRITICAL.
"""

from __future__ import annotations

from enum import IntEnum
import logging


class Severity(IntEnum):
    PANIC = 60
    FATAL = logging.CRITICAL
    ERROR = logging.ERROR
    WARNING = logging.WARNING
    INFO = logging.INFO
    DEBUG = logging.DEBUG

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_levelno(cls, levelno: int) -> "Severity":
        """
        Map a stdlib level number onto the closest severity at or below it.

        Custom levels between the standard ones round down (ex: 25 -> INFO);
        anything below DEBUG is reported as DEBUG.
        """

        for severity in sorted(cls, reverse=True):
            if levelno >= severity:
                return severity
        return cls.DEBUG


ALL_SEVERITIES = frozenset(Severity)

logging.addLevelName(int(Severity.PANIC), "PANIC")
