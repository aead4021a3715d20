"""Database infrastructure - shared connection primitives."""

from infrastructure.database.engines import build_async_url, create_write_engine
from infrastructure.database.models import Base, TimestampMixin, utc_now
from infrastructure.database.transactions import transaction

__all__ = [
    "Base",
    "TimestampMixin",
    "build_async_url",
    "create_write_engine",
    "transaction",
    "utc_now",
]
