import pytest
from clubdesk.errors import MonthFinalizedError
from clubdesk.models import MonthlyFinalization
from clubdesk.services import finalization


def test_month_starts_open(app):
    status = finalization.get_status("2025-07")
    assert status == {"month": "2025-07", "is_finalized": False, "finalized_at": None}


def test_finalize_is_idempotent_and_keeps_first_timestamp(app):
    first = finalization.finalize("2025-07")
    second = finalization.finalize("2025-07")

    assert first["is_finalized"] is True
    assert second["finalized_at"] == first["finalized_at"]
    assert MonthlyFinalization.query.filter_by(month="2025-07").count() == 1


def test_ensure_editable_refuses_finalized_month(app):
    finalization.finalize("2025-07")

    with pytest.raises(MonthFinalizedError):
        finalization.ensure_editable("2025-07-12")
    assert finalization.ensure_editable("2025-08-01") == "2025-08"


def test_finalize_route_logs_once(client, audit_log):
    res = client.post("/attendance/finalize", json={"month": "2025-07"})
    assert res.status_code == 200
    assert res.get_json()["is_finalized"] is True

    client.post("/attendance/finalize", json={"month": "2025-07"})
    assert audit_log().count("MONTH_FINALIZED") == 1

    status = client.get("/attendance/finalization?month=2025-07").get_json()
    assert status["is_finalized"] is True


def test_finalize_route_rejects_bad_month(client):
    res = client.post("/attendance/finalize", json={"month": "2025-99"})
    assert res.status_code == 400
