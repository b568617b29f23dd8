"""Store catalog models: products and discount codes."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.store_service.models.enums import (
    DiscountType,
    ProductCategory,
    StockStatus,
    enum_values,
)
from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

# JSONB on Postgres, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Product(Base):
    """Meters and accessories sold in the store (e.g., 'Contor trifazat DIN')."""

    __tablename__ = "store_products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_store_products_price_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sku: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Filterable attributes
    category: Mapped[ProductCategory] = mapped_column(
        SAEnum(
            ProductCategory,
            values_callable=enum_values,
            name="store_product_category_enum",
        ),
        nullable=False,
        index=True,
    )
    manufacturer: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    series: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    mounting: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    protocol: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    max_capacity: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2), nullable=True
    )

    # Pricing
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="RON", server_default="RON")

    # Availability
    stock_status: Mapped[StockStatus] = mapped_column(
        SAEnum(
            StockStatus,
            values_callable=enum_values,
            name="store_stock_status_enum",
        ),
        default=StockStatus.IN_STOCK,
        server_default="in_stock",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true"
    )

    # Media and documents
    image_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    datasheet_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    # Free-form content
    specs: Mapped[dict] = mapped_column(JSONType, default=dict)  # {"Tensiune": "230V"}
    short_description: Mapped[dict] = mapped_column(
        JSONType, default=dict
    )  # {"ro": "...", "en": "..."}
    full_description: Mapped[dict] = mapped_column(JSONType, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<Product {self.sku}>"


class Discount(Base):
    """Promotional codes. Matching on `code` is case-sensitive."""

    __tablename__ = "store_discounts"
    __table_args__ = (
        CheckConstraint("value >= 0", name="ck_store_discounts_value_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[DiscountType] = mapped_column(
        SAEnum(
            DiscountType,
            values_callable=enum_values,
            name="store_discount_type_enum",
        ),
        nullable=False,
    )
    value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<Discount {self.code}>"
