"""Pydantic schemas for store service."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)
from services.store_service.models import (
    DiscountType,
    OrderStatus,
    ProductCategory,
    StockStatus,
)

# ============================================================================
# PRODUCT SCHEMAS
# ============================================================================


class ProductBase(BaseModel):
    sku: str = Field(..., max_length=100)
    name: str = Field(..., max_length=255)
    category: ProductCategory
    manufacturer: str = Field(..., max_length=100)
    series: Optional[str] = Field(None, max_length=100)
    mounting: Optional[str] = Field(None, max_length=100)
    protocol: Optional[str] = Field(None, max_length=255)
    max_capacity: Optional[Decimal] = None
    price: Decimal = Field(..., ge=0)
    currency: str = Field("RON", max_length=3)
    stock_status: StockStatus = StockStatus.IN_STOCK
    is_active: bool = True
    image_url: Optional[str] = Field(None, max_length=512)
    datasheet_url: Optional[str] = Field(None, max_length=512)
    specs: dict[str, str] = Field(default_factory=dict)
    short_description: dict[str, str] = Field(default_factory=dict)
    full_description: dict[str, str] = Field(default_factory=dict)


class ProductImport(ProductBase):
    """One record of an admin catalog import; upserted by SKU."""

    @field_validator("specs", "short_description", "full_description", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return v or {}


class ProductResponse(ProductBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime


class ProductImportResult(BaseModel):
    success: bool = True
    created: int
    updated: int


# ============================================================================
# DISCOUNT SCHEMAS
# ============================================================================


class DiscountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    type: DiscountType
    value: Decimal


# ============================================================================
# PRICING SCHEMAS
# ============================================================================


class CartLine(BaseModel):
    """A cart line as sent by the browser.

    Only `id` and `quantity` are read; price, name and any other field the
    client attaches are dropped.
    """

    id: int
    quantity: Any = 1


class QuoteRequest(BaseModel):
    items: list[CartLine] = Field(..., min_length=1)
    discount_code: Optional[str] = Field(None, max_length=50)


class QuotedLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: int
    name: str
    sku: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class QuoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    items: list[QuotedLineResponse]
    subtotal: Decimal
    discount_code: Optional[str] = None
    discount_amount: Decimal
    total: Decimal


# ============================================================================
# ORDER SCHEMAS
# ============================================================================


class Address(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    company: Optional[str] = Field(None, max_length=255)
    address1: str = Field(..., min_length=1, max_length=255)
    address2: Optional[str] = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    postcode: Optional[str] = Field(None, max_length=20)
    country: str = Field("Romania", max_length=100)
    phone: str = Field(..., min_length=1, max_length=50)

    @field_validator("name", "address1", "city", "phone", mode="before")
    @classmethod
    def strip_required(cls, v):
        return v.strip() if isinstance(v, str) else v


class OrderCreate(BaseModel):
    email: EmailStr
    billing: Address
    shipping: Optional[Address] = None
    items: list[CartLine] = Field(..., min_length=1)
    discount_code: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, max_length=2000)
    client_token: Optional[str] = Field(None, max_length=100)


class OrderCreated(BaseModel):
    success: bool = True
    order_number: str
    total: Decimal


class OrderSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_number: str
    date: datetime = Field(validation_alias=AliasChoices("created_at", "date"))
    total: Decimal = Field(validation_alias=AliasChoices("final_total", "total"))
    status: OrderStatus


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: Optional[int] = None
    product_name: str
    sku: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class OrderDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_number: str
    status: OrderStatus
    customer_email: str
    order_notes: Optional[str] = None
    billing_details: dict
    shipping_details: dict
    subtotal: Decimal
    discount_code: Optional[str] = None
    discount_amount: Decimal
    final_total: Decimal
    currency: str
    created_at: datetime
    items: list[OrderItemResponse] = []


# ============================================================================
# CONTACT SCHEMAS
# ============================================================================


class ContactMessage(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    message: str = Field(..., min_length=1, max_length=5000)
    phone: Optional[str] = Field(None, max_length=50)

    @field_validator("name", "message", "phone", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class ContactAccepted(BaseModel):
    success: bool = True
