"""Tests for creating and deleting transactions and the history they feed."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import select

from app.models import MonthHistory, Transaction, TransactionType, YearHistory
from app.services.query_cache import query_cache

BALANCE_KEY = ("overview", "user_1", "balance", date(2024, 3, 1), date(2024, 3, 31))


@pytest.fixture
def categories(make_category):
    make_category("Food", TransactionType.EXPENSE, icon="🍔")
    make_category("Salary", TransactionType.INCOME, icon="💼")


def _create(client, headers, **overrides):
    payload = {
        "amount": "19.99",
        "description": "Lunch",
        "date": "2024-03-15",
        "category": "Food",
        "type": "expense",
    }
    payload.update(overrides)
    return client.post("/api/transactions", json=payload, headers=headers)


class TestCreateTransaction:

    def test_creates_transaction(self, client, auth_headers, categories, db):
        response = _create(client, auth_headers)
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["status"] == "created"

        tx = db.execute(select(Transaction)).scalar_one()
        assert tx.amount == Decimal("19.99")
        assert tx.category == "Food"
        assert tx.category_icon == "🍔"
        assert tx.user_id == "user_1"
        assert str(tx.id) == body["data"]["transaction_id"]

    def test_missing_description_is_stored_empty(self, client, auth_headers, categories, db):
        response = _create(client, auth_headers, description=None)
        assert response.status_code == 201
        assert db.execute(select(Transaction)).scalar_one().description == ""

    def test_validation_errors_are_field_scoped(self, client, auth_headers, categories):
        response = _create(client, auth_headers, amount="10.005", type="gift")
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert sorted(e["field"] for e in error["details"]["errors"]) == ["amount", "type"]

    def test_amount_too_large_for_storage_is_a_validation_error(self, client, auth_headers, categories, db):
        for amount in ("1e30", "10000000000.00"):
            response = _create(client, auth_headers, amount=amount)
            assert response.status_code == 400
            error = response.json()["error"]
            assert error["code"] == "VALIDATION_ERROR"
            assert [e["field"] for e in error["details"]["errors"]] == ["amount"]
        assert db.execute(select(Transaction)).scalars().all() == []

    def test_unknown_category_is_rejected(self, client, auth_headers, categories):
        response = _create(client, auth_headers, category="Salary")
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Category not found"

    def test_requires_authentication(self, client, categories):
        response = _create(client, {})
        assert response.status_code == 401

    def test_updates_day_and_month_history(self, client, auth_headers, categories, db):
        _create(client, auth_headers, amount="10.50")
        _create(client, auth_headers, amount="4.50")
        _create(client, auth_headers, amount=1000, category="Salary", type="income", date="2024-03-01")

        day = db.execute(select(MonthHistory).filter_by(user_id="user_1", day=15, month=3, year=2024)).scalar_one()
        assert day.expense == Decimal("15.00")
        assert day.income == Decimal("0")

        month = db.execute(select(YearHistory).filter_by(user_id="user_1", month=3, year=2024)).scalar_one()
        assert month.expense == Decimal("15.00")
        assert month.income == Decimal("1000.00")

    def test_invalidates_cached_overview(self, client, auth_headers, categories):
        params = {"from": "2024-03-01", "to": "2024-03-31"}
        before = client.get("/api/stats/balance", params=params, headers=auth_headers)
        assert before.json()["data"] == {"income": 0.0, "expense": 0.0}
        assert BALANCE_KEY in query_cache

        _create(client, auth_headers, amount="20.00")

        assert BALANCE_KEY not in query_cache
        after = client.get("/api/stats/balance", params=params, headers=auth_headers)
        assert after.json()["data"] == {"income": 0.0, "expense": 20.0}


class TestDeleteTransaction:

    def test_delete_reverses_history(self, client, auth_headers, categories, db):
        created = _create(client, auth_headers, amount="30.00").json()["data"]["transaction_id"]
        _create(client, auth_headers, amount="5.00")

        response = client.delete(f"/api/transactions/{created}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "deleted"

        db.expire_all()
        assert len(db.execute(select(Transaction)).scalars().all()) == 1
        month = db.execute(select(YearHistory).filter_by(user_id="user_1", month=3, year=2024)).scalar_one()
        assert month.expense == Decimal("5.00")

    def test_cannot_delete_another_users_transaction(self, client, auth_headers, other_headers, categories):
        created = _create(client, auth_headers).json()["data"]["transaction_id"]
        response = client.delete(f"/api/transactions/{created}", headers=other_headers)
        assert response.status_code == 404

    def test_unknown_id(self, client, auth_headers):
        response = client.delete("/api/transactions/00000000-0000-0000-0000-000000000000", headers=auth_headers)
        assert response.status_code == 404


class TestFormDefaultsEndpoint:

    def test_defaults_for_type(self, client):
        response = client.get("/api/transactions/form-defaults", params={"type": "income"})
        data = response.json()["data"]
        assert data["type"] == "income"
        assert data["amount"] == 0
        assert data["category"] == ""
        assert data["description"] == ""
