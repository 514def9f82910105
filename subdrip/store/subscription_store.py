"""
Subscription Store

The store owns the subscription collection and mediates every read and
write. Mutations are written through to storage immediately; reads
recompute derived views (totals, sort order, calendar matches) from the
current records every time.

DESIGN DECISION: Persistence failures are absorbed, not raised.
- Missing or corrupt stored data means "no prior data": start empty.
- A failed write leaves the in-memory change in place; the stored copy
  simply stays at the last successful save.
Both cases are recorded by the audit logger.

PRECONDITION: Callers generate unique ids (Subscription.create does).
add() does not check for duplicates.
"""

from decimal import Decimal
from typing import Iterable, Iterator, Optional
from uuid import UUID

from subdrip.audit import AuditLogger, get_audit_logger
from subdrip.models.audit import AuditEventBuilder
from subdrip.models.subscription import (
    Category,
    DateLike,
    Subscription,
    as_calendar_day,
)
from subdrip.services.storage import (
    KeyValueStorageInterface,
    decode_subscriptions,
    encode_subscriptions,
)


DEFAULT_STORAGE_KEY = "subdrip.subscriptions"


class SubscriptionStore:
    """
    Ordered collection of subscriptions with write-through persistence.

    Single-owner, single-threaded: no locking is done.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        storage_key: str = DEFAULT_STORAGE_KEY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._storage_key = storage_key
        self._audit = audit_logger or get_audit_logger()
        self._subscriptions: list[Subscription] = self._load()

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _load(self) -> list[Subscription]:
        """Decode stored subscriptions, or start empty."""
        try:
            blob = self._storage.read(self._storage_key)
        except Exception as e:
            # Host backends may raise anything; the cause is logged, not raised
            self._audit.log(
                AuditEventBuilder.load_fallback_empty(self._storage_key, str(e))
            )
            return []

        if blob is None:
            self._audit.log(
                AuditEventBuilder.load_fallback_empty(self._storage_key, "absent")
            )
            return []

        decoded = decode_subscriptions(blob)
        if decoded is None:
            self._audit.log(
                AuditEventBuilder.load_fallback_empty(self._storage_key, "malformed")
            )
            return []

        self._audit.log(
            AuditEventBuilder.subscriptions_loaded(len(decoded), self._storage_key)
        )
        return decoded

    def _save(self) -> None:
        """Write the whole collection. Failures are logged and skipped."""
        try:
            blob = encode_subscriptions(self._subscriptions)
            self._storage.write(self._storage_key, blob)
        except Exception as e:
            self._audit.log(
                AuditEventBuilder.save_failed(
                    self._storage_key,
                    len(self._subscriptions),
                    str(e),
                )
            )

    def reload(self) -> None:
        """Discard in-memory state and re-read storage."""
        self._subscriptions = self._load()

    # -------------------------------------------------------------------------
    # Collection access
    # -------------------------------------------------------------------------

    @property
    def subscriptions(self) -> list[Subscription]:
        """Snapshot of all subscriptions in insertion order."""
        return list(self._subscriptions)

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __iter__(self) -> Iterator[Subscription]:
        return iter(list(self._subscriptions))

    def _index_of(self, subscription_id: UUID) -> Optional[int]:
        for index, subscription in enumerate(self._subscriptions):
            if subscription.id == subscription_id:
                return index
        return None

    def get(self, subscription_id: UUID) -> Optional[Subscription]:
        index = self._index_of(subscription_id)
        if index is None:
            return None
        return self._subscriptions[index]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, subscription: Subscription) -> None:
        """Append a subscription and persist."""
        self._subscriptions.append(subscription)
        self._save()
        self._audit.log(
            AuditEventBuilder.subscription_added(subscription.id, subscription.name)
        )

    def update(self, subscription: Subscription) -> None:
        """
        Replace the subscription with the same id, in place, and persist.

        Does nothing if no subscription has that id.
        """
        index = self._index_of(subscription.id)
        if index is None:
            self._audit.log(
                AuditEventBuilder.subscription_not_found(subscription.id, "update")
            )
            return

        self._subscriptions[index] = subscription
        self._save()
        self._audit.log(
            AuditEventBuilder.subscription_updated(subscription.id, subscription.name)
        )

    def delete(self, subscription_id: UUID) -> None:
        """Remove the first subscription with this id, if any, and persist."""
        index = self._index_of(subscription_id)
        if index is None:
            self._audit.log(
                AuditEventBuilder.subscription_not_found(subscription_id, "delete")
            )
            return

        removed = self._subscriptions.pop(index)
        self._save()
        self._audit.log(
            AuditEventBuilder.subscription_deleted(removed.id, removed.name)
        )

    def delete_at(self, positions: Iterable[int]) -> None:
        """
        Remove subscriptions at the given positions of the current order.

        Raises:
            IndexError: If any position is out of range. Nothing is
                removed in that case.
        """
        unique_positions = sorted(set(positions), reverse=True)
        size = len(self._subscriptions)
        for position in unique_positions:
            if not 0 <= position < size:
                raise IndexError(
                    f"Position {position} out of range for {size} subscriptions"
                )

        removed = [self._subscriptions.pop(p) for p in unique_positions]
        self._save()
        for subscription in reversed(removed):
            self._audit.log(
                AuditEventBuilder.subscription_deleted(
                    subscription.id, subscription.name
                )
            )

    # -------------------------------------------------------------------------
    # Aggregates
    # -------------------------------------------------------------------------

    def total_monthly_spending(self) -> Decimal:
        """
        Sum of monthly prices in USD.

        Summed per category first, so it always equals the sum of
        spending_by_category() digit for digit.
        """
        return sum(self.spending_by_category().values(), Decimal("0"))

    def total_yearly_spending(self) -> Decimal:
        """Sum of yearly prices in USD."""
        return sum(
            (s.yearly_price for s in self._subscriptions),
            Decimal("0"),
        )

    def sorted_by_next_payment(self, now: DateLike) -> list[Subscription]:
        """Subscriptions by next payment date, soonest first. Stable."""
        today = as_calendar_day(now)
        return sorted(
            self._subscriptions,
            key=lambda s: s.next_payment_date(today),
        )

    def for_date(self, day: DateLike, now: DateLike) -> list[Subscription]:
        """Subscriptions whose next payment falls on `day`."""
        target = as_calendar_day(day)
        today = as_calendar_day(now)
        return [
            s for s in self._subscriptions
            if s.next_payment_date(today) == target
        ]

    def spending_by_category(self) -> dict[Category, Decimal]:
        """
        Monthly spending per category, in USD.

        Categories without subscriptions are absent, not zero.
        """
        result: dict[Category, Decimal] = {}
        for subscription in self._subscriptions:
            result[subscription.category] = (
                result.get(subscription.category, Decimal("0"))
                + subscription.monthly_price
            )
        return result

    def spending_by_category_sorted(self) -> list[tuple[Category, Decimal]]:
        """Category spending, largest first."""
        return sorted(
            self.spending_by_category().items(),
            key=lambda item: item[1],
            reverse=True,
        )

    def most_expensive(self) -> Optional[Subscription]:
        """Subscription with the highest monthly price, or None if empty."""
        if not self._subscriptions:
            return None
        return max(self._subscriptions, key=lambda s: s.monthly_price)
