"""Unit tests for the pricing engine.

price_lines is pure: products and discounts are plain objects, no database.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest
from services.store_service.exceptions import ProductUnavailableError, ValidationError
from services.store_service.models import DiscountType
from services.store_service.services.pricing import (
    MAX_QUANTITY,
    LineRequest,
    clamp_quantity,
    compute_discount,
    price_lines,
)


def _product(product_id, price, name=None, sku=None):
    return SimpleNamespace(
        id=product_id,
        name=name or f"Product {product_id}",
        sku=sku or f"SKU-{product_id}",
        price=Decimal(price),
    )


def _discount(kind, value, code="PROMO"):
    return SimpleNamespace(code=code, type=kind, value=Decimal(value))


# ---------------------------------------------------------------------------
# clamp_quantity
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [
        (3, 3),
        (2.7, 2),
        ("4", 4),
        ("abc", 1),
        (None, 1),
        (0, 1),
        (-5, 1),
        (0.5, 1),
        (float("inf"), 1),
        (float("nan"), 1),
        (True, 1),
        ([2], 1),
        (1e27, MAX_QUANTITY),
        (MAX_QUANTITY + 0.5, MAX_QUANTITY),
        (10**400, MAX_QUANTITY),
        (-(10**400), 1),
    ],
)
def test_clamp_quantity(raw, expected):
    assert clamp_quantity(raw) == expected


# ---------------------------------------------------------------------------
# price_lines
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_subtotal_uses_catalog_prices_and_clamped_quantities():
    products = {1: _product(1, "450.00"), 2: _product(2, "19.99")}
    lines = [LineRequest(1, 2), LineRequest(2, -3), LineRequest(2, "x")]

    quote = price_lines(products, lines)

    assert [line.quantity for line in quote.items] == [2, 1, 1]
    assert quote.items[0].line_total == Decimal("900.00")
    assert quote.subtotal == Decimal("939.98")
    assert quote.discount_code is None
    assert quote.discount_amount == Decimal("0")
    assert quote.total == Decimal("939.98")


@pytest.mark.unit
def test_snapshot_carries_name_and_sku():
    products = {5: _product(5, "10.00", name="Water meter DN20", sku="WM-DN20")}

    quote = price_lines(products, [LineRequest(5, 1)])

    line = quote.items[0]
    assert line.product_id == 5
    assert line.name == "Water meter DN20"
    assert line.sku == "WM-DN20"
    assert line.unit_price == Decimal("10.00")


@pytest.mark.unit
def test_percent_discount():
    products = {1: _product(1, "1000.00")}

    quote = price_lines(
        products, [LineRequest(1, 1)], _discount(DiscountType.PERCENT, "10")
    )

    assert quote.subtotal == Decimal("1000.00")
    assert quote.discount_amount == Decimal("100.00")
    assert quote.total == Decimal("900.00")
    assert quote.discount_code == "PROMO"


@pytest.mark.unit
def test_fixed_discount_larger_than_subtotal_clamps_total_to_zero():
    products = {1: _product(1, "30.00")}

    quote = price_lines(
        products, [LineRequest(1, 1)], _discount(DiscountType.FIXED, "50")
    )

    assert quote.subtotal == Decimal("30.00")
    assert quote.discount_amount == Decimal("50.00")
    assert quote.total == Decimal("0.00")


@pytest.mark.unit
def test_missing_products_fail_the_whole_quote():
    products = {1: _product(1, "10.00")}
    lines = [LineRequest(1, 1), LineRequest(9, 1), LineRequest(7, 2), LineRequest(9, 1)]

    with pytest.raises(ProductUnavailableError) as exc_info:
        price_lines(products, lines)

    assert exc_info.value.product_ids == [7, 9]
    body = exc_info.value.to_body()
    assert body["code"] == "PRODUCT_UNAVAILABLE"
    assert body["product_ids"] == [7, 9]


@pytest.mark.unit
def test_huge_quantity_is_capped():
    products = {1: _product(1, "450.00")}

    quote = price_lines(products, [LineRequest(1, 1e27)])

    assert quote.items[0].quantity == MAX_QUANTITY
    assert quote.subtotal == Decimal("4500000.00")


@pytest.mark.unit
def test_subtotal_beyond_money_column_is_rejected():
    products = {1: _product(1, "9999999999.99"), 2: _product(2, "1.00")}

    with pytest.raises(ValidationError) as exc_info:
        price_lines(products, [LineRequest(1, 1), LineRequest(2, 1)])

    assert exc_info.value.status_code == 400


# ---------------------------------------------------------------------------
# compute_discount
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_percent_discount_rounds_half_up_to_cents():
    rule = _discount(DiscountType.PERCENT, "15")

    assert compute_discount(Decimal("33.33"), rule) == Decimal("5.00")


@pytest.mark.unit
def test_no_discount_is_zero():
    assert compute_discount(Decimal("120.00"), None) == Decimal("0")
