"""
Tests for Subdrip models

Test strategy:
1. Unit tests for the subscription model and its billing-date math
2. Store and summary tests run against in-memory storage
3. No wall clock in tests: "now" is always a fixed date
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import uuid4

from pydantic import ValidationError

from subdrip.models.subscription import (
    BillingCycle,
    Category,
    InvalidPriceError,
    Subscription,
    parse_price,
)
from subdrip.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


def make_subscription(
    price="15.99",
    billing_cycle=BillingCycle.MONTHLY,
    start_date=date(2024, 1, 1),
    category=Category.ENTERTAINMENT,
    name="Netflix",
):
    return Subscription.create(
        name=name,
        price=price,
        billing_cycle=billing_cycle,
        category=category,
        start_date=start_date,
    )


class TestSubscriptionModel:
    """Tests for Subscription construction and validation."""

    def test_create_fills_icon_and_color_from_category(self):
        """Test that create() derives icon and color from the category."""
        sub = make_subscription(category=Category.HEALTH)
        assert sub.icon_name == "heart.fill"
        assert sub.color_hex == "#30D158"
        assert sub.notes == ""

    def test_create_assigns_unique_ids(self):
        """Test that every created subscription gets a fresh id."""
        assert make_subscription().id != make_subscription().id

    def test_name_strips_whitespace(self):
        sub = make_subscription(name="  Spotify  ")
        assert sub.name == "Spotify"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            make_subscription(name="   ")

    def test_non_positive_price_rejected(self):
        """Test that zero and negative prices are rejected at construction."""
        for price in (Decimal("0"), Decimal("-1")):
            with pytest.raises(ValidationError):
                Subscription(
                    name="Bad",
                    price=price,
                    billing_cycle=BillingCycle.MONTHLY,
                    category=Category.OTHER,
                    icon_name="x",
                    start_date=date(2024, 1, 1),
                    color_hex="#000000",
                )

    def test_unknown_enum_label_rejected(self):
        with pytest.raises(ValidationError):
            Subscription(
                name="Bad",
                price=Decimal("1"),
                billing_cycle="Daily",
                category=Category.OTHER,
                icon_name="x",
                start_date=date(2024, 1, 1),
                color_hex="#000000",
            )

    def test_subscription_is_frozen(self):
        sub = make_subscription()
        with pytest.raises(ValidationError):
            sub.price = Decimal("1")

    def test_model_copy_keeps_id(self):
        sub = make_subscription()
        edited = sub.model_copy(update={"name": "Netflix Premium"})
        assert edited.id == sub.id
        assert edited.name == "Netflix Premium"

    def test_accepts_camel_case_field_names(self):
        """Test that persisted camelCase keys validate."""
        sub = Subscription.model_validate({
            "id": str(uuid4()),
            "name": "Gym",
            "price": "30",
            "billingCycle": "Monthly",
            "category": "Health",
            "iconName": "heart.fill",
            "startDate": "2024-02-01",
            "colorHex": "#30D158",
            "notes": "",
        })
        assert sub.billing_cycle == BillingCycle.MONTHLY
        assert sub.start_date == date(2024, 2, 1)


class TestParsePrice:
    """Tests for user price input parsing."""

    def test_parses_decimal_text(self):
        assert parse_price(" 15.99 ") == Decimal("15.99")

    def test_parses_float_without_binary_noise(self):
        assert parse_price(15.99) == Decimal("15.99")

    @pytest.mark.parametrize("raw", ["abc", "", "nan", "inf", "0", "-5"])
    def test_rejects_invalid_input(self, raw):
        with pytest.raises(InvalidPriceError):
            parse_price(raw)

    def test_invalid_price_error_is_value_error(self):
        with pytest.raises(ValueError):
            make_subscription(price="twelve")


class TestNormalizedPrices:
    """Tests for monthly/yearly normalization."""

    def test_weekly_multipliers(self):
        sub = make_subscription(price="10", billing_cycle=BillingCycle.WEEKLY)
        assert sub.monthly_price == Decimal("43.30")
        assert sub.yearly_price == Decimal("520")

    def test_monthly_multipliers(self):
        sub = make_subscription(price="15.99", billing_cycle=BillingCycle.MONTHLY)
        assert sub.monthly_price == Decimal("15.99")
        assert sub.yearly_price == Decimal("191.88")
        assert sub.yearly_price == sub.monthly_price * 12

    def test_yearly_multipliers(self):
        sub = make_subscription(price="120", billing_cycle=BillingCycle.YEARLY)
        assert sub.monthly_price == Decimal("10")
        assert sub.yearly_price == Decimal("120")

    def test_weekly_yearly_is_not_twelve_months(self):
        """Weekly uses fixed multipliers, not monthly x 12."""
        sub = make_subscription(price="10", billing_cycle=BillingCycle.WEEKLY)
        assert sub.yearly_price != sub.monthly_price * 12


class TestNextPaymentDate:
    """Tests for next payment date projection."""

    def test_monthly_scenario(self):
        sub = make_subscription(price="15.99", start_date=date(2024, 1, 1))
        now = date(2024, 3, 15)
        assert sub.next_payment_date(now) == date(2024, 4, 1)
        assert sub.days_until_next_payment(now) == 17

    def test_start_today_is_not_advanced(self):
        sub = make_subscription(start_date=date(2024, 3, 15))
        assert sub.next_payment_date(date(2024, 3, 15)) == date(2024, 3, 15)
        assert sub.days_until_next_payment(date(2024, 3, 15)) == 0

    def test_future_start_is_returned_as_is(self):
        sub = make_subscription(start_date=date(2024, 6, 1))
        now = date(2024, 3, 15)
        assert sub.next_payment_date(now) == date(2024, 6, 1)
        assert sub.days_until_next_payment(now) == 78

    def test_weekly_steps_seven_days(self):
        sub = make_subscription(
            billing_cycle=BillingCycle.WEEKLY,
            start_date=date(2024, 1, 1),
        )
        assert sub.next_payment_date(date(2024, 1, 10)) == date(2024, 1, 15)

    def test_monthly_clamps_to_end_of_february(self):
        sub = make_subscription(start_date=date(2024, 1, 31))
        assert sub.next_payment_date(date(2024, 2, 15)) == date(2024, 2, 29)

    def test_monthly_clamp_carries_forward(self):
        """Each step starts from the previous result."""
        sub = make_subscription(start_date=date(2024, 1, 31))
        assert sub.next_payment_date(date(2024, 3, 1)) == date(2024, 3, 29)

    def test_yearly_from_leap_day(self):
        sub = make_subscription(
            billing_cycle=BillingCycle.YEARLY,
            start_date=date(2024, 2, 29),
        )
        assert sub.next_payment_date(date(2025, 1, 1)) == date(2025, 2, 28)

    def test_datetime_now_uses_calendar_day(self):
        """Time of day does not change the result."""
        sub = make_subscription(start_date=date(2024, 1, 1))
        late = datetime(2024, 3, 15, 23, 59, 59)
        early = datetime(2024, 3, 15, 0, 0, 1, tzinfo=timezone.utc)
        assert sub.days_until_next_payment(late) == 17
        assert sub.days_until_next_payment(early) == 17

    @pytest.mark.parametrize("cycle", list(BillingCycle))
    def test_result_is_on_or_after_now_and_on_cycle(self, cycle):
        start = date(2023, 1, 31)
        now = date(2024, 7, 4)
        sub = make_subscription(billing_cycle=cycle, start_date=start)
        result = sub.next_payment_date(now)

        assert result >= now
        step = start
        while step < result:
            step = cycle.advance(step)
        assert step == result

    def test_next_payment_label(self):
        sub = make_subscription(start_date=date(2024, 1, 1))
        assert sub.next_payment_label(date(2024, 4, 1)) == "Today"
        assert sub.next_payment_label(date(2024, 3, 31)) == "Tomorrow"
        assert sub.next_payment_label(date(2024, 3, 15)) == "17 days"


class TestEnumTables:
    """Tests for the fixed enum attribute tables."""

    def test_billing_cycle_labels(self):
        assert [c.value for c in BillingCycle] == ["Weekly", "Monthly", "Yearly"]
        assert [c.short_name for c in BillingCycle] == ["wk", "mo", "yr"]
        assert BillingCycle.WEEKLY.days_in_cycle == 7

    def test_all_categories_exist(self):
        expected = [
            "Entertainment", "Software", "Health",
            "Utilities", "Shopping", "Other",
        ]
        assert [c.value for c in Category] == expected

    def test_category_icons_and_colors(self):
        assert Category.ENTERTAINMENT.icon_name == "tv.fill"
        assert Category.SOFTWARE.color_hex == "#007AFF"
        assert Category.OTHER.icon_name == "square.grid.2x2.fill"
        for category in Category:
            assert category.color_hex.startswith("#")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_defaults(self):
        event = AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_ADDED,
            description="Added",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        sub_id = uuid4()
        event = AuditEventBuilder.subscription_added(sub_id, "Netflix")
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "subscription_added"
        assert log_dict["entity_id"] == str(sub_id)
        assert log_dict["details"]["name"] == "Netflix"

    def test_builder_severities(self):
        assert (
            AuditEventBuilder.load_fallback_empty("k", "absent").severity
            == AuditSeverity.WARNING
        )
        assert (
            AuditEventBuilder.save_failed("k", 1, "disk full").severity
            == AuditSeverity.ERROR
        )
        assert (
            AuditEventBuilder.subscription_not_found(uuid4(), "delete").severity
            == AuditSeverity.DEBUG
        )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
