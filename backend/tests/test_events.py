from clubdesk.models import Event, Transaction, TransactionType
from clubdesk.services import events, ledger


def test_save_event_books_income(app, audit_log):
    event = events.save_event({
        "name": "夏合宿", "date": "2025-08-10",
        "trial_participants": 3, "contest_entries": 4, "actual_revenue": 10000,
    })

    assert event.calculated_revenue == 3 * 2000 + 4 * 1000
    tx = Transaction.query.one()
    assert event.transaction_id == tx.id
    assert tx.type == TransactionType.income
    assert tx.category == "イベント"
    assert tx.title == "夏合宿 収支"
    assert tx.memo == "参加体験: 3人, エントリー: 4人"
    assert tx.amount == 10000
    assert "EVENT_SAVED" in audit_log()


def test_updating_event_updates_its_ledger_row(app):
    event = events.save_event({"name": "大会", "date": "2025-08-10", "actual_revenue": 5000})
    events.save_event({"actual_revenue": 8000, "contest_entries": 2}, event=event)

    tx = Transaction.query.one()
    assert tx.amount == 8000
    assert tx.memo == "参加体験: 0人, エントリー: 2人"


def test_delete_event_removes_ledger_row(app):
    event = events.save_event({"name": "大会", "date": "2025-08-10", "actual_revenue": 5000})
    events.delete_event(event)

    assert Event.query.count() == 0
    assert Transaction.query.count() == 0


def test_event_routes(client):
    res = client.post("/events/create", json={"name": "体験会"})
    assert res.status_code == 400

    res = client.post("/events/create", json={"name": "体験会", "date": "2025-09-01", "trial_participants": 5})
    assert res.status_code == 201
    event_id = res.get_json()["event"]["id"]
    assert res.get_json()["event"]["calculated_revenue"] == 10000

    res = client.put(f"/events/update/{event_id}", json={"trial_fee": -1})
    assert res.status_code == 400

    listed = client.get("/events/list").get_json()
    assert [e["name"] for e in listed] == ["体験会"]

    assert client.delete(f"/events/remove/{event_id}").status_code == 200
    assert client.get(f"/events/{event_id}").status_code == 404


def test_deleting_event_row_from_ledger_unlinks_event(app):
    event = events.save_event({"name": "大会", "date": "2025-08-10", "actual_revenue": 5000})
    ledger.delete_transaction(Transaction.query.one())
    assert event.transaction_id is None

    rent = ledger.add_transaction({"title": "体育館使用料", "type": "expense", "amount": 8000, "date": "2025-08-01"})
    events.save_event({"actual_revenue": 6000}, event=event)

    assert rent.amount == 8000
    assert rent.title == "体育館使用料"
    assert Transaction.query.filter_by(category="イベント").one().amount == 6000

    events.delete_event(event)
    assert [t.title for t in Transaction.query.all()] == ["体育館使用料"]
