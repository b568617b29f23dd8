"""Integration tests for "my orders": history and ownership-checked details."""

from decimal import Decimal

import pytest
from tests.factories import (
    OrderFactory,
    OrderItemFactory,
    ProductFactory,
    days_ago,
    order_payload,
)


async def _order_with_items(db_session, **overrides):
    order = OrderFactory.create(**overrides)
    db_session.add(order)
    await db_session.flush()
    db_session.add_all(
        [
            OrderItemFactory.create(order.id, sku="EM-1", quantity=2),
            OrderItemFactory.create(order.id, sku="MB-1"),
        ]
    )
    await db_session.commit()
    return order


# ---------------------------------------------------------------------------
# GET /api/order-history
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_history_by_token_newest_first(client, db_session):
    older = OrderFactory.create(client_token="tok-a", created_at=days_ago(5))
    newer = OrderFactory.create(
        client_token="tok-a", created_at=days_ago(1), final_total=Decimal("250.00")
    )
    other = OrderFactory.create(client_token="tok-b")
    db_session.add_all([older, newer, other])
    await db_session.commit()

    response = await client.get("/api/order-history", params={"token": "tok-a"})

    assert response.status_code == 200
    data = response.json()
    assert [o["order_number"] for o in data] == [newer.order_number, older.order_number]
    assert set(data[0]) == {"order_number", "date", "total", "status"}
    assert Decimal(data[0]["total"]) == Decimal("250")
    assert data[0]["status"] == "new"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_history_falls_back_to_request_ip(client, db_session):
    mine = OrderFactory.create(client_token=None, client_ip="127.0.0.1")
    theirs = OrderFactory.create(client_token=None, client_ip="10.9.9.9")
    db_session.add_all([mine, theirs])
    await db_session.commit()

    response = await client.get("/api/order-history")

    assert [o["order_number"] for o in response.json()] == [mine.order_number]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_token_takes_precedence_over_ip(client, db_session):
    same_ip = OrderFactory.create(client_token="tok-b", client_ip="127.0.0.1")
    db_session.add(same_ip)
    await db_session.commit()

    response = await client.get("/api/order-history", params={"token": "tok-a"})

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_history_via_forwarded_ip(client, db_session):
    proxied = OrderFactory.create(client_token=None, client_ip="203.0.113.7")
    db_session.add(proxied)
    await db_session.commit()

    response = await client.get(
        "/api/order-history", headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}
    )

    assert [o["order_number"] for o in response.json()] == [proxied.order_number]


# ---------------------------------------------------------------------------
# GET /api/order-details/{order_number}
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_owner_gets_details_with_items(client, db_session):
    order = await _order_with_items(db_session, client_token="tok-a")

    response = await client.get(
        f"/api/order-details/{order.order_number}", params={"token": "tok-a"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["order_number"] == order.order_number
    assert data["customer_email"] == "buyer@test.com"
    assert data["billing_details"]["city"] == "Brasov"
    assert [(i["sku"], i["quantity"]) for i in data["items"]] == [("EM-1", 2), ("MB-1", 1)]
    assert "client_token" not in data
    assert "client_ip" not in data


@pytest.mark.asyncio
@pytest.mark.integration
async def test_token_mismatch_looks_like_missing_order(client, db_session):
    order = await _order_with_items(db_session, client_token="tok-a", client_ip="127.0.0.1")

    wrong = await client.get(
        f"/api/order-details/{order.order_number}", params={"token": "tok-x"}
    )
    missing = await client.get(
        "/api/order-details/ORD-1999-999999", params={"token": "tok-x"}
    )

    assert wrong.status_code == 404
    assert missing.status_code == 404
    assert wrong.json() == missing.json() == {
        "detail": "Order not found",
        "code": "NOT_FOUND",
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_details_by_ip_without_token(client, db_session):
    order = await _order_with_items(db_session, client_token=None, client_ip="127.0.0.1")
    foreign = await _order_with_items(db_session, client_token=None, client_ip="10.1.1.1")

    mine = await client.get(f"/api/order-details/{order.order_number}")
    theirs = await client.get(f"/api/order-details/{foreign.order_number}")

    assert mine.status_code == 200
    assert theirs.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_placed_order_shows_up_in_history(client, db_session):
    product = ProductFactory.create(price=Decimal("75.50"))
    db_session.add(product)
    await db_session.commit()

    placed = await client.post(
        "/api/orders",
        json=order_payload([{"id": product.id, "quantity": 2}], client_token="tok-e2e"),
    )
    assert placed.status_code == 201
    order_number = placed.json()["order_number"]

    history = await client.get("/api/order-history", params={"token": "tok-e2e"})
    details = await client.get(
        f"/api/order-details/{order_number}", params={"token": "tok-e2e"}
    )

    assert [o["order_number"] for o in history.json()] == [order_number]
    assert details.status_code == 200
    assert Decimal(details.json()["final_total"]) == Decimal("151")
    assert details.json()["items"][0]["quantity"] == 2
