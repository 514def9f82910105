"""
Subscription Codec

Encodes the whole collection as one JSON array. Field names are camelCase
and enums are stored as their raw labels ("Monthly", "Entertainment").

Decoding is decode-or-nothing: any malformed payload yields None and the
caller decides what "no data" means.
"""

from typing import Iterable, Optional

from pydantic import TypeAdapter, ValidationError

from subdrip.models.subscription import Subscription


_SUBSCRIPTION_LIST = TypeAdapter(list[Subscription])


def encode_subscriptions(subscriptions: Iterable[Subscription]) -> bytes:
    """Serialize subscriptions to a JSON array."""
    return _SUBSCRIPTION_LIST.dump_json(list(subscriptions), by_alias=True)


def decode_subscriptions(blob: Optional[bytes]) -> Optional[list[Subscription]]:
    """
    Parse a JSON array of subscriptions.

    Returns None if the blob is missing or does not decode.
    """
    if blob is None:
        return None
    try:
        return _SUBSCRIPTION_LIST.validate_json(blob)
    except ValidationError:
        return None
