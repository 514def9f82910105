"""Subscription store package."""

from subdrip.store.subscription_store import DEFAULT_STORAGE_KEY, SubscriptionStore

__all__ = ["DEFAULT_STORAGE_KEY", "SubscriptionStore"]
