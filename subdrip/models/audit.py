"""
Audit Models for Subdrip

Every change to the subscription collection, and every failure the store
absorbs instead of raising, produces an audit event. Nothing is silently
lost: a corrupt save file still leaves a trace in the log.

DESIGN DECISION: Audit events are append-only records.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Persistence
    SUBSCRIPTIONS_LOADED = "subscriptions_loaded"
    LOAD_FALLBACK_EMPTY = "load_fallback_empty"
    SAVE_FAILED = "save_failed"

    # Collection changes
    SUBSCRIPTION_ADDED = "subscription_added"
    SUBSCRIPTION_UPDATED = "subscription_updated"
    SUBSCRIPTION_DELETED = "subscription_deleted"
    SUBSCRIPTION_NOT_FOUND = "subscription_not_found"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant store action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which subscription is this about?
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the subscription this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.subscription_added(
            subscription_id=sub.id,
            name=sub.name,
        )
        audit_logger.log(event)
    """

    @staticmethod
    def subscriptions_loaded(count: int, storage_key: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTIONS_LOADED,
            description=f"Loaded {count} subscription(s)",
            details={"count": count, "storage_key": storage_key},
        )

    @staticmethod
    def load_fallback_empty(storage_key: str, reason: str) -> AuditEvent:
        """Stored data was absent or unreadable; starting empty."""
        return AuditEvent(
            event_type=AuditEventType.LOAD_FALLBACK_EMPTY,
            severity=AuditSeverity.WARNING,
            description="No usable stored subscriptions, starting empty",
            details={"storage_key": storage_key, "reason": reason},
        )

    @staticmethod
    def save_failed(
        storage_key: str,
        count: int,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description="Failed to persist subscriptions",
            details={"storage_key": storage_key, "count": count},
            error_message=error_message,
        )

    @staticmethod
    def subscription_added(subscription_id: UUID, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_ADDED,
            entity_id=subscription_id,
            description=f"Subscription added: {name}",
            details={"name": name},
        )

    @staticmethod
    def subscription_updated(subscription_id: UUID, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_UPDATED,
            entity_id=subscription_id,
            description=f"Subscription updated: {name}",
            details={"name": name},
        )

    @staticmethod
    def subscription_deleted(subscription_id: UUID, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_DELETED,
            entity_id=subscription_id,
            description=f"Subscription deleted: {name}",
            details={"name": name},
        )

    @staticmethod
    def subscription_not_found(
        subscription_id: UUID,
        operation: str,
    ) -> AuditEvent:
        """Update or delete targeted an id that is not in the store."""
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_NOT_FOUND,
            severity=AuditSeverity.DEBUG,
            entity_id=subscription_id,
            description=f"No subscription to {operation}",
            details={"operation": operation},
        )
