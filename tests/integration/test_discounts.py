"""Integration tests for GET /api/validate-discount."""

from decimal import Decimal

import pytest
from tests.factories import DiscountFactory


@pytest.mark.asyncio
@pytest.mark.integration
async def test_active_code_is_returned(client, db_session):
    db_session.add(DiscountFactory.create(code="WELCOME10", value=Decimal("10")))
    await db_session.commit()

    response = await client.get("/api/validate-discount", params={"code": "WELCOME10"})

    assert response.status_code == 200
    data = response.json()
    assert data["code"] == "WELCOME10"
    assert data["type"] == "percent"
    assert Decimal(data["value"]) == Decimal("10")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_code_matching_is_case_sensitive(client, db_session):
    db_session.add(DiscountFactory.create(code="WELCOME10"))
    await db_session.commit()

    response = await client.get("/api/validate-discount", params={"code": "welcome10"})

    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_inactive_code_is_not_found(client, db_session):
    db_session.add(DiscountFactory.create(code="OLD2024", is_active=False))
    await db_session.commit()

    response = await client.get("/api/validate-discount", params={"code": "OLD2024"})

    assert response.status_code == 404
    assert response.json() == {
        "detail": "Invalid or expired discount code",
        "code": "NOT_FOUND",
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_missing_code_is_a_validation_error(client):
    response = await client.get("/api/validate-discount")

    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["errors"][0]["loc"] == ["query", "code"]
