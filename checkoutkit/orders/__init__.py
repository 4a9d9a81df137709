"""
Orders — where completed checkouts are submitted.

    sink = InMemoryOrderSink()                       # tests, demos

    sessions, engine = await create_order_database() # sqlite+aiosqlite by default
    sink = SqlOrderSink(sessions)

Both implement ``OrderSink.submit(order) -> Result[str, str]``.
"""

from checkoutkit.orders._sink import OrderSink, InMemoryOrderSink
from checkoutkit.orders._sql import Base, OrderRecord, create_order_database, SqlOrderSink

__all__ = (
    "OrderSink",
    "InMemoryOrderSink",
    "Base",
    "OrderRecord",
    "create_order_database",
    "SqlOrderSink",
)
