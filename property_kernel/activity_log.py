"""
Activity log -- typed system events on top of structured logging.

Every entity lifecycle change and synchronization step is emitted as a
structured record on the ``property_kernel.activity`` logger.  The record
carries the event type, severity, free-form details and the related
entities, so a log shipper can rebuild the system-log view without
parsing message strings.

Usage:
    from property_kernel.activity_log import LogType, log_event

    log_event(
        LogType.ENTITY_CREATED,
        "base parameters created",
        details={"name": "main"},
        related_entities={"entity_type": "base_parameters", "entity_id": "..."},
    )
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from property_kernel.logging_config import get_logger

logger = get_logger("activity")


class LogType(str, Enum):
    """Kind of activity being recorded."""

    ENTITY_CREATED = "entity_created"
    ENTITY_UPDATED = "entity_updated"
    ENTITY_DELETED = "entity_deleted"
    SYNC_STARTED = "sync_started"
    SYNC_COMPLETED = "sync_completed"
    SYNC_FAILED = "sync_failed"
    PAYMENT_GENERATED = "payment_generated"
    REMINDER_TRIGGERED = "reminder_triggered"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class LogSeverity(str, Enum):
    """Severity of an activity record."""

    VERBOSE = "verbose"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


_LEVELS: dict[LogSeverity, int] = {
    LogSeverity.VERBOSE: logging.DEBUG,
    LogSeverity.INFO: logging.INFO,
    LogSeverity.WARNING: logging.WARNING,
    LogSeverity.ERROR: logging.ERROR,
    LogSeverity.CRITICAL: logging.CRITICAL,
}


def log_event(
    log_type: LogType,
    message: str,
    details: dict[str, Any] | None = None,
    severity: LogSeverity = LogSeverity.INFO,
    related_entities: dict[str, Any] | None = None,
) -> None:
    """Emit one activity record at the level matching ``severity``."""
    logger.log(
        _LEVELS[severity],
        log_type.value,
        extra={
            "activity_message": message,
            "severity": severity.value,
            "details": details or {},
            "related_entities": related_entities or {},
        },
    )


def log_entity_created(entity_type: str, entity_id: str, details: dict[str, Any] | None = None) -> None:
    log_event(
        LogType.ENTITY_CREATED,
        f"created {entity_type}",
        details,
        LogSeverity.INFO,
        {"entity_type": entity_type, "entity_id": entity_id},
    )


def log_entity_updated(
    entity_type: str,
    entity_id: str,
    changes: dict[str, Any] | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    log_event(
        LogType.ENTITY_UPDATED,
        f"updated {entity_type}",
        {**(details or {}), "changes": changes or {}},
        LogSeverity.INFO,
        {"entity_type": entity_type, "entity_id": entity_id},
    )
