"""
Spending Summary

DESIGN DECISION: Summaries are computed, never stored.
The builder reads the store, converts every amount into the caller's
display currency, and returns plain models the presentation layer can
render directly. The currency code is always an argument; nothing here
reads user preferences.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from subdrip.models.subscription import (
    BillingCycle,
    Category,
    DateLike,
    Subscription,
    as_calendar_day,
)
from subdrip.services.currency import BASE_CURRENCY, CurrencyConverter
from subdrip.store import SubscriptionStore


class PaymentLine(BaseModel):
    """One subscription as shown in a list: when it is due and how much."""

    subscription_id: UUID
    name: str
    category: Category
    billing_cycle: BillingCycle
    icon_name: str
    color_hex: str
    next_payment_date: date
    days_until: int = Field(ge=0)
    due_label: str
    price: Decimal = Field(
        ...,
        description="Price per cycle in the display currency"
    )
    monthly_price: Decimal = Field(
        ...,
        description="Monthly-normalized price in the display currency"
    )
    formatted_price: str


class CategorySpending(BaseModel):
    """Monthly spending in one category."""

    category: Category
    icon_name: str
    color_hex: str
    amount: Decimal = Field(
        ...,
        description="Monthly amount in the display currency"
    )
    formatted_amount: str
    share: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Fraction of total monthly spending"
    )


class SpendingSummary(BaseModel):
    """Everything the overview and analytics screens show."""

    as_of: date
    currency_code: str
    currency_symbol: str
    subscription_count: int = Field(ge=0)

    monthly_total: Decimal
    yearly_total: Decimal
    formatted_monthly_total: str
    formatted_yearly_total: str

    categories: list[CategorySpending] = Field(default_factory=list)
    most_expensive: Optional[PaymentLine] = None
    upcoming: list[PaymentLine] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.subscription_count == 0


class SummaryBuilder:
    """
    Builds display-ready summaries from a subscription store.

    GUARANTEES:
    - Totals are the store's totals, converted once at the end
    - Category shares sum to 1 (within rounding) when not empty
    """

    def __init__(self, store: SubscriptionStore):
        self._store = store

    def _payment_line(
        self,
        subscription: Subscription,
        today: date,
        currency_code: str,
    ) -> PaymentLine:
        price = CurrencyConverter.convert(
            subscription.price, BASE_CURRENCY, currency_code
        )
        monthly = CurrencyConverter.convert(
            subscription.monthly_price, BASE_CURRENCY, currency_code
        )
        return PaymentLine(
            subscription_id=subscription.id,
            name=subscription.name,
            category=subscription.category,
            billing_cycle=subscription.billing_cycle,
            icon_name=subscription.icon_name,
            color_hex=subscription.color_hex,
            next_payment_date=subscription.next_payment_date(today),
            days_until=subscription.days_until_next_payment(today),
            due_label=subscription.next_payment_label(today),
            price=price,
            monthly_price=monthly,
            formatted_price=(
                f"{CurrencyConverter.symbol(currency_code)}{price:.2f}"
                f"/{subscription.billing_cycle.short_name}"
            ),
        )

    def _category_breakdown(self, currency_code: str) -> list[CategorySpending]:
        total = self._store.total_monthly_spending()
        breakdown = []
        for category, amount in self._store.spending_by_category_sorted():
            converted = CurrencyConverter.convert(amount, BASE_CURRENCY, currency_code)
            share = float(amount / total) if total else 0.0
            breakdown.append(
                CategorySpending(
                    category=category,
                    icon_name=category.icon_name,
                    color_hex=category.color_hex,
                    amount=converted,
                    formatted_amount=CurrencyConverter.format(amount, currency_code),
                    share=min(share, 1.0),
                )
            )
        return breakdown

    def build(
        self,
        currency_code: str,
        now: DateLike,
        upcoming_limit: int = 5,
    ) -> SpendingSummary:
        """
        Summarize the store for display.

        Args:
            currency_code: Display currency (unknown codes show USD amounts)
            now: Reference point for next payment dates
            upcoming_limit: How many upcoming payments to include
        """
        today = as_calendar_day(now)
        monthly = self._store.total_monthly_spending()
        yearly = self._store.total_yearly_spending()

        top = self._store.most_expensive()
        upcoming = self._store.sorted_by_next_payment(today)[:max(upcoming_limit, 0)]

        return SpendingSummary(
            as_of=today,
            currency_code=currency_code,
            currency_symbol=CurrencyConverter.symbol(currency_code),
            subscription_count=len(self._store),
            monthly_total=CurrencyConverter.convert(monthly, BASE_CURRENCY, currency_code),
            yearly_total=CurrencyConverter.convert(yearly, BASE_CURRENCY, currency_code),
            formatted_monthly_total=CurrencyConverter.format(monthly, currency_code),
            formatted_yearly_total=CurrencyConverter.format(yearly, currency_code),
            categories=self._category_breakdown(currency_code),
            most_expensive=(
                self._payment_line(top, today, currency_code) if top else None
            ),
            upcoming=[
                self._payment_line(s, today, currency_code) for s in upcoming
            ],
        )

    def payments_on(
        self,
        day: DateLike,
        now: DateLike,
        currency_code: str,
    ) -> list[PaymentLine]:
        """Payment lines for one calendar day."""
        today = as_calendar_day(now)
        return [
            self._payment_line(s, today, currency_code)
            for s in self._store.for_date(day, today)
        ]
