"""
Component Wiring for Subdrip

This module ties the pieces together for a host application:
settings -> storage backend -> audit logger -> store -> summary builder.

DESIGN DECISION: Only this module reads settings.
The store, converter and summary builder take everything they need as
arguments, so they can be built directly in tests without any
environment.
"""

from typing import Optional

from subdrip.audit import AuditLogger, setup_logging
from subdrip.config import Settings, get_settings
from subdrip.config.settings import StorageSettings
from subdrip.queries import SummaryBuilder
from subdrip.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
)
from subdrip.store import SubscriptionStore


def create_storage(storage_settings: StorageSettings) -> KeyValueStorageInterface:
    """Build the configured key-value backend."""
    if storage_settings.backend == "memory":
        return InMemoryKeyValueStorage()
    return JsonFileKeyValueStorage(storage_settings.path)


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
) -> tuple[SubscriptionStore, SummaryBuilder, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use. Defaults to get_settings().
        storage: Explicit storage backend. Overrides the configured one;
                 useful for tests and for hosts with their own storage.

    Returns:
        (store, summary_builder, audit_logger), with the store already loaded
    """
    settings = settings or get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    setup_logging("DEBUG" if app_settings.debug_mode else app_settings.log_level)

    audit_logger = AuditLogger()
    storage = storage or create_storage(storage_settings)
    store = SubscriptionStore(
        storage=storage,
        storage_key=storage_settings.key,
        audit_logger=audit_logger,
    )

    return store, SummaryBuilder(store), audit_logger
