"""
SQL order store — orders persisted as JSON blobs keyed by order number.

    session_factory, engine = await create_order_database()
    sink = SqlOrderSink(session_factory)
    ack = await sink.submit(order)
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

import structlog
from kungfu import Result, Ok, Error
from sqlalchemy import DateTime, Float, String, Text, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from checkoutkit import lift as L
from checkoutkit.models import Order

logger = structlog.get_logger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Schema
# ═══════════════════════════════════════════════════════════════════════════════

class Base(DeclarativeBase):
    pass


class OrderRecord(Base):
    __tablename__ = "orders"

    order_number: Mapped[str] = mapped_column(String(40), primary_key=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    total: Mapped[float] = mapped_column(Float, nullable=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


async def create_order_database(
    url: str = "sqlite+aiosqlite:///:memory:",
) -> tuple[async_sessionmaker[AsyncSession], AsyncEngine]:
    """Create the orders table and return (session_factory, engine)."""
    engine = create_async_engine(url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    return async_sessionmaker(engine, expire_on_commit=False), engine


# ═══════════════════════════════════════════════════════════════════════════════
# Sink
# ═══════════════════════════════════════════════════════════════════════════════

class SqlOrderSink:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = session_factory

    async def submit(self, order: Order) -> Result[str, str]:
        async def _insert() -> str:
            async with self._sessions() as session:
                session.add(OrderRecord(
                    order_number=order.order_number,
                    status=order.status.value,
                    total=order.total,
                    payload=json.dumps(order.to_dict()),
                    created_at=order.created_at,
                ))
                await session.commit()
            return order.order_number

        result = await L.from_awaitable(_insert, on_error=_describe_db_error)
        match result:
            case Ok(ack):
                logger.info("order_stored", order_number=ack, total=order.total)
                return Ok(ack)
            case Error(reason):
                logger.error("order_submit_failed", order_number=order.order_number, reason=reason)
                return Error(reason)

    async def fetch(self, order_number: str) -> dict[str, Any] | None:
        async with self._sessions() as session:
            record = await session.get(OrderRecord, order_number)
            return json.loads(record.payload) if record else None

    async def order_numbers(self) -> list[str]:
        async with self._sessions() as session:
            rows = await session.execute(select(OrderRecord.order_number).order_by(OrderRecord.created_at))
            return list(rows.scalars())


def _describe_db_error(exc: Exception) -> str:
    if isinstance(exc, IntegrityError):
        return "duplicate order number"
    return f"order store error: {exc}"


__all__ = ("Base", "OrderRecord", "create_order_database", "SqlOrderSink")
