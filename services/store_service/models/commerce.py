"""Store order models: order headers and line-item snapshots."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.store_service.models.catalog import JSONType
from services.store_service.models.enums import OrderStatus, enum_values
from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

PLACEHOLDER_PREFIX = "PENDING-"


class Order(Base):
    """Orders placed through checkout.

    `id` is the durable auto-increment identifier; `order_number` is derived
    from it inside the placement transaction.
    """

    __tablename__ = "store_orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_number: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, index=True
    )

    # Anonymous ownership correlation
    client_token: Mapped[Optional[str]] = mapped_column(
        String(100), index=True, nullable=True
    )
    client_ip: Mapped[Optional[str]] = mapped_column(
        String(64), index=True, nullable=True
    )

    # Customer
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    order_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    billing_details: Mapped[dict] = mapped_column(JSONType, nullable=False)
    shipping_details: Mapped[dict] = mapped_column(JSONType, nullable=False)

    # Totals (server-computed)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    discount_code: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    discount_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=0, server_default="0"
    )
    final_total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="RON", server_default="RON")

    status: Mapped[OrderStatus] = mapped_column(
        SAEnum(
            OrderStatus,
            values_callable=enum_values,
            name="store_order_status_enum",
        ),
        default=OrderStatus.NEW,
        server_default="new",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    @staticmethod
    def placeholder_number() -> str:
        """Unique throwaway number used until the row id is known."""
        return f"{PLACEHOLDER_PREFIX}{uuid.uuid4().hex}"

    @staticmethod
    def format_order_number(prefix: str, year: int, order_id: int) -> str:
        """Human-readable number derived from the row id, e.g. ORD-2026-000042."""
        return f"{prefix}-{year}-{order_id:06d}"

    def __repr__(self):
        return f"<Order {self.order_number}>"


class OrderItem(Base):
    """Immutable snapshot of a purchased product at order time."""

    __tablename__ = "store_order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("store_orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Plain reference, not a live pointer; the snapshot below is authoritative
    product_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    sku: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    line_total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    order = relationship("Order", back_populates="items")

    def __repr__(self):
        return f"<OrderItem {self.sku} x{self.quantity}>"
