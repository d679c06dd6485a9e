from datetime import date
import pytest
from clubdesk.extensions import db
from clubdesk.models import Transaction, TransactionType
from clubdesk.services import ledger


def tx(day, kind, amount, title="entry", category="その他"):
    return Transaction(date=day, type=TransactionType(kind), amount=amount, title=title, category=category)


def test_add_transaction_validates_amount(app):
    with pytest.raises(ValueError):
        ledger.add_transaction({"title": "会場", "type": "expense", "amount": 0})
    with pytest.raises(ValueError):
        ledger.add_transaction({"title": "会場", "type": "refund", "amount": 100})
    with pytest.raises(ValueError):
        ledger.add_transaction({"type": "income", "amount": 100})


def test_add_transaction_defaults_category(app):
    created = ledger.add_transaction({"title": "寄付", "type": "income", "amount": "3000", "date": "2025-07-01"})
    assert created.category == "なし"
    assert created.amount == 3000


def test_summary_balance_and_current_month(app):
    db.session.add_all([
        tx(date(2025, 6, 20), "income", 10000),
        tx(date(2025, 7, 3), "income", 4000),
        tx(date(2025, 7, 9), "expense", 1500),
    ])
    db.session.commit()

    result = ledger.summary(today=date(2025, 7, 15))

    assert result == {"balance": 12500, "income_total": 4000, "expense_total": 1500, "month": "2025-07"}


def test_yearly_balance_carries_over_previous_years(app):
    db.session.add_all([
        tx(date(2023, 5, 1), "income", 8000),
        tx(date(2024, 12, 31), "expense", 3000),
        tx(date(2025, 2, 1), "income", 2000),
        tx(date(2025, 3, 1), "expense", 500),
        tx(date(2026, 1, 1), "income", 99999),
    ])
    db.session.commit()

    result = ledger.yearly_balance(2025)

    assert result["carryover_balance"] == 5000
    assert result["total_income"] == 7000
    assert result["total_expense"] == 500
    assert result["balance"] == 6500
    assert len(result["transactions"]) == 2


def test_transactions_listed_newest_first(client):
    client.post("/accounting/transactions", json={"title": "a", "type": "income", "amount": 100, "date": "2025-07-01"})
    client.post("/accounting/transactions", json={"title": "b", "type": "expense", "amount": 50, "date": "2025-07-10"})

    rows = client.get("/accounting/transactions?month=2025-07").get_json()

    assert [r["title"] for r in rows] == ["b", "a"]
    assert rows[0]["type"] == "expense"


def test_transaction_routes(client):
    res = client.post("/accounting/transactions", json={"title": "備品", "type": "expense", "amount": -5})
    assert res.status_code == 400

    res = client.post("/accounting/transactions", json={"title": "備品", "type": "expense", "amount": 1200})
    assert res.status_code == 201
    tx_id = res.get_json()["transaction"]["id"]

    assert client.get("/accounting/summary").get_json()["balance"] == -1200
    assert client.delete(f"/accounting/transactions/{tx_id}").status_code == 200
    assert client.delete(f"/accounting/transactions/{tx_id}").status_code == 404


def test_yearly_route(client):
    client.post("/accounting/transactions", json={"title": "x", "type": "income", "amount": 700, "date": "2024-04-01"})
    body = client.get("/accounting/yearly?year=2025").get_json()
    assert body["carryover_balance"] == 700
    assert body["balance"] == 700
