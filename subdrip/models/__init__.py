"""
Data Models Package

This package contains all Pydantic models used in Subdrip.
"""

from subdrip.models.subscription import (
    BillingCycle,
    Category,
    InvalidPriceError,
    Subscription,
    as_calendar_day,
    parse_price,
)
from subdrip.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Subscription models
    "BillingCycle",
    "Category",
    "InvalidPriceError",
    "Subscription",
    "as_calendar_day",
    "parse_price",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
