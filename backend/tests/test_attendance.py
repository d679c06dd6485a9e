from datetime import date
import pytest
from clubdesk.errors import MonthFinalizedError
from clubdesk.models import AttendanceRecord
from clubdesk.services import attendance, finalization
from conftest import add_attendance, july


def test_save_daily_snapshots_whole_roster(roster):
    taro, hanako, ken, misaki = roster["taro"], roster["hanako"], roster["ken"], roster["misaki"]

    result = attendance.save_daily(
        "2025-07-05",
        student_presence={str(taro.id): True},
        instructor_status={str(ken.id): "late"},
        location="市民体育館",
    )

    records = AttendanceRecord.query.filter_by(date=date(2025, 7, 5)).all()
    assert len(records) == 4
    by_student = {r.student_id: r.status for r in records if r.student_id}
    by_instructor = {r.instructor_id: r.status for r in records if r.instructor_id}
    assert by_student == {taro.id: "present", hanako.id: "absent"}
    assert by_instructor == {ken.id: "late", misaki.id: "absent"}
    assert result["location"] == "市民体育館"
    assert result["students"] == {taro.id: True}


def test_save_daily_replaces_previous_snapshot(roster):
    taro = roster["taro"]
    attendance.save_daily("2025-07-05", student_presence={taro.id: True})
    attendance.save_daily("2025-07-05", student_presence={})

    records = AttendanceRecord.query.filter_by(date=date(2025, 7, 5), student_id=taro.id).all()
    assert [r.status for r in records] == ["absent"]
    assert AttendanceRecord.query.filter_by(date=date(2025, 7, 5)).count() == 4


def test_save_daily_rejects_unknown_instructor_status(roster):
    with pytest.raises(ValueError):
        attendance.save_daily("2025-07-05", instructor_status={roster["ken"].id: "sick"})


def test_writes_refused_once_month_is_finalized(roster):
    taro = roster["taro"]
    add_attendance(taro, july(5))
    finalization.finalize("2025-07")

    with pytest.raises(MonthFinalizedError):
        attendance.save_daily("2025-07-12", student_presence={taro.id: True})
    with pytest.raises(MonthFinalizedError):
        attendance.cycle_cell(attendance.STUDENT, taro.id, "2025-07-05")

    assert AttendanceRecord.query.count() == 1


def test_instructor_cycle(roster):
    ken = roster["ken"]
    seen = []
    for _ in range(4):
        record = attendance.cycle_cell(attendance.INSTRUCTOR, ken.id, "2025-07-05")
        seen.append(record["status"] if record else None)

    assert seen == ["present", "late", "absent", None]


def test_student_cycle_skips_late(roster):
    taro = roster["taro"]
    seen = []
    for _ in range(3):
        record = attendance.cycle_cell(attendance.STUDENT, taro.id, "2025-07-05")
        seen.append(record["status"] if record else None)

    assert seen == ["present", "absent", None]


def test_cycled_cell_inherits_location_of_the_day(roster):
    add_attendance(roster["hanako"], july(5), location="河川敷")
    record = attendance.cycle_cell(attendance.STUDENT, roster["taro"].id, "2025-07-05")
    assert record["location"] == "河川敷"


def test_set_cell_none_clears_record(roster):
    taro = roster["taro"]
    attendance.set_cell(attendance.STUDENT, taro.id, "2025-07-05", "late")
    assert attendance.set_cell(attendance.STUDENT, taro.id, "2025-07-05", "none") is None
    assert AttendanceRecord.query.count() == 0


def test_monthly_grid_totals_weigh_late_as_half(roster):
    ken = roster["ken"]
    attendance.set_cell(attendance.INSTRUCTOR, ken.id, "2025-07-05", "present")
    attendance.set_cell(attendance.INSTRUCTOR, ken.id, "2025-07-12", "late")
    add_attendance(roster["taro"], july(5, 12))

    grid = attendance.get_monthly_grid("2025-07")

    assert grid["totals"]["instructor"][ken.id] == 1.5
    assert grid["totals"]["student"][roster["taro"].id] == 2
    assert grid["active_dates"] == ["2025-07-05", "2025-07-12"]
    assert grid["finalization"]["is_finalized"] is False


def test_daily_route_round_trip(client, roster):
    taro = roster["taro"]
    res = client.post("/attendance/daily", json={
        "date": "2025-07-05",
        "students": {str(taro.id): True},
        "instructors": {},
        "location": "市民体育館",
    })
    assert res.status_code == 200

    daily = client.get("/attendance/daily?date=2025-07-05").get_json()
    assert daily["students"] == {str(taro.id): True}
    assert daily["location"] == "市民体育館"


def test_daily_route_returns_409_for_finalized_month(client, roster):
    finalization.finalize("2025-07")
    res = client.post("/attendance/daily", json={"date": "2025-07-05", "students": {}})
    assert res.status_code == 409


def test_cell_route_validates_status(client, roster):
    res = client.put("/attendance/cell", json={
        "subject_type": "student", "subject_id": roster["taro"].id, "date": "2025-07-05", "status": "maybe"
    })
    assert res.status_code == 400


def test_cycle_route_unknown_student_is_404(client, roster):
    res = client.post("/attendance/cycle", json={"subject_type": "student", "subject_id": 999, "date": "2025-07-05"})
    assert res.status_code == 404
