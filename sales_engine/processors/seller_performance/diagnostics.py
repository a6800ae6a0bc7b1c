"""
Diagnostics — Side channel for non-fatal data-consistency messages.

The aggregation core never logs directly. It records messages on a sink
passed in by the caller:

    - LoggingSink    → forwards to the standard `logging` module (default)
    - CollectingSink → keeps every message in memory (tests, snapshot counters)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import NamedTuple, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class Diagnostic(NamedTuple):
    message: str
    severity: Severity


@runtime_checkable
class DiagnosticSink(Protocol):
    """Anything with a `record(message, severity)` method."""

    def record(self, message: str, severity: Severity) -> None:
        ...


class LoggingSink:
    """Forward diagnostics to a logger at the matching level."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def record(self, message: str, severity: Severity) -> None:
        self._log.log(_LEVELS[Severity(severity)], message)


class CollectingSink:
    """
    Keep diagnostics in memory, optionally forwarding to another sink.

    Usage:
        sink = CollectingSink()
        analyze_sales_data(data, sink=sink)
        sink.messages(Severity.WARNING)
    """

    def __init__(self, forward_to: DiagnosticSink | None = None):
        self.records: list[Diagnostic] = []
        self._forward_to = forward_to

    def record(self, message: str, severity: Severity) -> None:
        self.records.append(Diagnostic(message, Severity(severity)))
        if self._forward_to is not None:
            self._forward_to.record(message, severity)

    def messages(self, severity: Severity | None = None) -> list[str]:
        return [
            d.message for d in self.records
            if severity is None or d.severity == severity
        ]

    def counts(self) -> dict[str, int]:
        out = {s.value: 0 for s in Severity}
        for d in self.records:
            out[d.severity.value] += 1
        return out

    def __len__(self) -> int:
        return len(self.records)
