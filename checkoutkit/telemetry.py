"""
Telemetry — write-only sink for checkout breadcrumbs and attribute logs.

The core never reads anything back from the sink. Two implementations:

    StructlogTelemetry()   # default, emits structured log events
    RecordingTelemetry()   # keeps events in memory (tests, demos)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

import structlog

# ═══════════════════════════════════════════════════════════════════════════════
# Breadcrumb names
# ═══════════════════════════════════════════════════════════════════════════════

CHECKOUT_STARTED = "CHECKOUT_STARTED"
CHECKOUT_STEP_ENTERED = "CHECKOUT_STEP_ENTERED"
CHECKOUT_STEP_EXITED = "CHECKOUT_STEP_EXITED"
CHECKOUT_SHIPPING_COMPLETED = "CHECKOUT_SHIPPING_COMPLETED"
CHECKOUT_PAYMENT_COMPLETED = "CHECKOUT_PAYMENT_COMPLETED"
SHIPPING_QUOTE_FAILED = "SHIPPING_QUOTE_FAILED"
PAYMENT_STARTED = "PAYMENT_STARTED"
PAYMENT_SUCCEEDED = "PAYMENT_SUCCEEDED"
PAYMENT_FAILED = "PAYMENT_FAILED"
PAYMENT_CANCELLED = "PAYMENT_CANCELLED"
PAYMENT_VOIDED = "PAYMENT_VOIDED"
ORDER_SUBMITTED = "ORDER_SUBMITTED"


class Level(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


# ═══════════════════════════════════════════════════════════════════════════════
# Sink protocol
# ═══════════════════════════════════════════════════════════════════════════════


class TelemetrySink(Protocol):
    def breadcrumb(self, name: str) -> None: ...

    def log(self, level: Level, message: str, **attributes: Any) -> None: ...


# ═══════════════════════════════════════════════════════════════════════════════
# Implementations
# ═══════════════════════════════════════════════════════════════════════════════


class StructlogTelemetry:
    """Forwards breadcrumbs and logs to a structlog logger."""

    def __init__(self, logger_name: str = "checkoutkit.telemetry") -> None:
        self._log = structlog.get_logger(logger_name)

    def breadcrumb(self, name: str) -> None:
        self._log.info("breadcrumb", breadcrumb=name)

    def log(self, level: Level, message: str, **attributes: Any) -> None:
        getattr(self._log, level.value)(message, **attributes)


@dataclass(frozen=True, slots=True)
class LogEntry:
    level: Level
    message: str
    attributes: dict[str, Any]


@dataclass(slots=True)
class RecordingTelemetry:
    breadcrumbs: list[str] = field(default_factory=list[str])
    logs: list[LogEntry] = field(default_factory=list[LogEntry])

    def breadcrumb(self, name: str) -> None:
        self.breadcrumbs.append(name)

    def log(self, level: Level, message: str, **attributes: Any) -> None:
        self.logs.append(LogEntry(level, message, dict(attributes)))

    def messages(self, level: Level | None = None) -> list[str]:
        return [e.message for e in self.logs if level is None or e.level is level]


__all__ = (
    "CHECKOUT_STARTED",
    "CHECKOUT_STEP_ENTERED",
    "CHECKOUT_STEP_EXITED",
    "CHECKOUT_SHIPPING_COMPLETED",
    "CHECKOUT_PAYMENT_COMPLETED",
    "SHIPPING_QUOTE_FAILED",
    "PAYMENT_STARTED",
    "PAYMENT_SUCCEEDED",
    "PAYMENT_FAILED",
    "PAYMENT_CANCELLED",
    "PAYMENT_VOIDED",
    "ORDER_SUBMITTED",
    "Level",
    "TelemetrySink",
    "StructlogTelemetry",
    "LogEntry",
    "RecordingTelemetry",
)
