"""Messaging: Redis pub/sub for permission cache invalidation."""

from permgraph.infrastructure.messaging.redis_pubsub import (
    InvalidationPublisher,
    InvalidationSubscriber,
    decode_invalidation,
    encode_invalidation,
)

__all__ = [
    "InvalidationPublisher",
    "InvalidationSubscriber",
    "decode_invalidation",
    "encode_invalidation",
]
