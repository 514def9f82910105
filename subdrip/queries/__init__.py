"""Spending summary package."""

from subdrip.queries.summary import (
    CategorySpending,
    PaymentLine,
    SpendingSummary,
    SummaryBuilder,
)

__all__ = [
    "CategorySpending",
    "PaymentLine",
    "SpendingSummary",
    "SummaryBuilder",
]
