"""Services package."""

from subdrip.services.currency import (
    BASE_CURRENCY,
    CURRENCY_SYMBOLS,
    EXCHANGE_RATES,
    SUPPORTED_CURRENCIES,
    CurrencyConverter,
)
from subdrip.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
    StorageError,
    StorageWriteError,
    decode_subscriptions,
    encode_subscriptions,
)

__all__ = [
    # Currency
    "BASE_CURRENCY",
    "CURRENCY_SYMBOLS",
    "EXCHANGE_RATES",
    "SUPPORTED_CURRENCIES",
    "CurrencyConverter",
    # Storage services
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "KeyValueStorageInterface",
    "StorageError",
    "StorageWriteError",
    "decode_subscriptions",
    "encode_subscriptions",
]
