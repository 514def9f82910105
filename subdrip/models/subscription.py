"""
Subscription Model for Subdrip

A Subscription is one recurring payment obligation. The record itself is
immutable; everything derived from it (normalized cost, next payment date,
days until payment) is recomputed on demand and never stored.

DESIGN DECISION: "now" is always passed in by the caller.
Nothing in this module reads the wall clock, which keeps every
derived value deterministic and testable.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Union
from uuid import UUID, uuid4

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DateLike = Union[date, datetime]


# =============================================================================
# ENUMS - Closed sets with fixed attribute tables
# =============================================================================

class BillingCycle(str, Enum):
    """
    Recurrence period of a subscription payment.

    Values are the raw labels used in persisted data.
    """
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"

    @property
    def short_name(self) -> str:
        """Short display label (wk/mo/yr)."""
        return _CYCLE_SHORT_NAMES[self]

    @property
    def days_in_cycle(self) -> int:
        """Approximate cycle length in days. Display only."""
        return _CYCLE_APPROX_DAYS[self]

    def advance(self, day: date) -> date:
        """
        Step a date forward by exactly one cycle.

        Months and years follow calendar semantics: Jan 31 + 1 month
        lands on the last day of February.
        """
        return day + _CYCLE_STEPS[self]


class Category(str, Enum):
    """
    Subscription categories.

    Icon and color are fixed per category and not user-editable.
    """
    ENTERTAINMENT = "Entertainment"
    SOFTWARE = "Software"
    HEALTH = "Health"
    UTILITIES = "Utilities"
    SHOPPING = "Shopping"
    OTHER = "Other"

    @property
    def icon_name(self) -> str:
        return _CATEGORY_ICONS[self]

    @property
    def color_hex(self) -> str:
        return _CATEGORY_COLORS[self]


_CYCLE_SHORT_NAMES = {
    BillingCycle.WEEKLY: "wk",
    BillingCycle.MONTHLY: "mo",
    BillingCycle.YEARLY: "yr",
}

_CYCLE_APPROX_DAYS = {
    BillingCycle.WEEKLY: 7,
    BillingCycle.MONTHLY: 30,
    BillingCycle.YEARLY: 365,
}

_CYCLE_STEPS = {
    BillingCycle.WEEKLY: timedelta(days=7),
    BillingCycle.MONTHLY: relativedelta(months=1),
    BillingCycle.YEARLY: relativedelta(years=1),
}

# Multipliers to normalize a price to one month / one year
_MONTHLY_FACTORS = {
    BillingCycle.WEEKLY: Decimal("4.33"),
    BillingCycle.MONTHLY: Decimal("1"),
}

_YEARLY_FACTORS = {
    BillingCycle.WEEKLY: Decimal("52"),
    BillingCycle.MONTHLY: Decimal("12"),
    BillingCycle.YEARLY: Decimal("1"),
}

_CATEGORY_ICONS = {
    Category.ENTERTAINMENT: "tv.fill",
    Category.SOFTWARE: "laptopcomputer",
    Category.HEALTH: "heart.fill",
    Category.UTILITIES: "bolt.fill",
    Category.SHOPPING: "cart.fill",
    Category.OTHER: "square.grid.2x2.fill",
}

_CATEGORY_COLORS = {
    Category.ENTERTAINMENT: "#FF453A",
    Category.SOFTWARE: "#007AFF",
    Category.HEALTH: "#30D158",
    Category.UTILITIES: "#FFD60A",
    Category.SHOPPING: "#BF5AF2",
    Category.OTHER: "#8E8E93",
}


# =============================================================================
# PRICE INPUT
# =============================================================================

class InvalidPriceError(ValueError):
    """Price input is not a finite positive number."""
    pass


def parse_price(raw: Union[str, int, float, Decimal]) -> Decimal:
    """
    Parse a user-entered price.

    Raises:
        InvalidPriceError: If the input is non-numeric, not finite,
            or not greater than zero.
    """
    text = str(raw).strip()
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise InvalidPriceError(f"Price is not a number: {raw!r}")

    if not value.is_finite():
        raise InvalidPriceError(f"Price must be finite: {raw!r}")
    if value <= 0:
        raise InvalidPriceError(f"Price must be greater than zero: {raw!r}")
    return value


def as_calendar_day(moment: DateLike) -> date:
    """Reduce a date or datetime to its calendar day."""
    if isinstance(moment, datetime):
        return moment.date()
    return moment


# =============================================================================
# CORE SUBSCRIPTION MODEL
# =============================================================================

class Subscription(BaseModel):
    """
    One recurring payment obligation.

    Prices are held in the base currency (USD). Persisted field names
    are camelCase (billingCycle, iconName, startDate, colorHex); Python
    code uses the snake_case names.

    The model is frozen. To edit a subscription, build a replacement with
    model_copy(update=...) and hand it to SubscriptionStore.update.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique subscription ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Display name"
    )
    price: Decimal = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Price per billing cycle in USD"
    )
    billing_cycle: BillingCycle
    category: Category
    icon_name: str = Field(
        ...,
        description="Key into the external icon set"
    )
    start_date: date = Field(
        ...,
        description="First billing date"
    )
    color_hex: str = Field(
        ...,
        description="Color tag, normally taken from the category"
    )
    notes: str = Field(
        default="",
        max_length=1000,
        description="Free-form user notes"
    )

    @classmethod
    def create(
        cls,
        name: str,
        price: Union[str, int, float, Decimal],
        billing_cycle: BillingCycle,
        category: Category,
        start_date: date,
        notes: str = "",
    ) -> "Subscription":
        """
        Build a new subscription with a fresh id.

        Icon and color come from the category tables.
        """
        return cls(
            name=name,
            price=parse_price(price),
            billing_cycle=billing_cycle,
            category=category,
            icon_name=category.icon_name,
            start_date=start_date,
            color_hex=category.color_hex,
            notes=notes,
        )

    @property
    def monthly_price(self) -> Decimal:
        """Price normalized to one month."""
        if self.billing_cycle == BillingCycle.YEARLY:
            return self.price / 12
        return self.price * _MONTHLY_FACTORS[self.billing_cycle]

    @property
    def yearly_price(self) -> Decimal:
        """Price normalized to one year."""
        return self.price * _YEARLY_FACTORS[self.billing_cycle]

    def next_payment_date(self, now: DateLike) -> date:
        """
        Smallest date on or after now's calendar day reachable from
        start_date by whole billing cycles.

        Each step starts from the previous result, so month-end clamping
        carries forward (Jan 31 -> Feb 29 -> Mar 29).
        """
        today = as_calendar_day(now)
        next_date = self.start_date
        while next_date < today:
            next_date = self.billing_cycle.advance(next_date)
        return next_date

    def days_until_next_payment(self, now: DateLike) -> int:
        """Whole calendar days from now to the next payment (0 = today)."""
        today = as_calendar_day(now)
        return (self.next_payment_date(today) - today).days

    def next_payment_label(self, now: DateLike) -> str:
        """Short relative label: Today, Tomorrow or 'N days'."""
        days = self.days_until_next_payment(now)
        if days == 0:
            return "Today"
        if days == 1:
            return "Tomorrow"
        return f"{days} days"
