from types import SimpleNamespace
from clubdesk.services.settings import TuitionSettings
from clubdesk.services.tuition import (
    calculate_tuition, count_billable_days, effective_daily_rate, month_bounds, month_label, month_of, parse_month
)
import pytest

SETTINGS = TuitionSettings(default_daily_rate=2000, bike_rental_fee=5000)


def student(id=1, daily_rate=0, bike=False):
    return SimpleNamespace(id=id, name="生徒", furigana="せいと", daily_rate=daily_rate, has_bike_rental=bike)


def record(student_id, status):
    return SimpleNamespace(student_id=student_id, instructor_id=None, status=status)


def test_default_rate_used_when_student_rate_is_zero():
    assert effective_daily_rate(student(daily_rate=0), SETTINGS) == 2000
    assert effective_daily_rate(student(daily_rate=2500), SETTINGS) == 2500


def test_only_present_days_are_billed():
    records = [record(1, "present"), record(1, "present"), record(1, "late"), record(1, "absent"), record(2, "present")]
    assert count_billable_days(1, records) == 2


def test_amount_is_days_times_rate_plus_bike_fee():
    records = [record(1, "present")] * 4
    line = calculate_tuition(student(daily_rate=2500, bike=True), records, SETTINGS, finalized=True)

    assert line.days_count == 4
    assert line.base_amount == 10000
    assert line.bike_amount == 5000
    assert line.calculated_amount == 15000
    assert (line.is_paid, line.payment_id) == (False, None)


def test_bike_fee_is_charged_even_without_attendance():
    line = calculate_tuition(student(bike=True), [], SETTINGS, finalized=True)
    assert line.days_count == 0
    assert line.calculated_amount == 5000


def test_nothing_is_owed_before_finalization():
    records = [record(1, "present")] * 3
    line = calculate_tuition(student(bike=True), records, SETTINGS, finalized=False)

    assert line.days_count == 3
    assert line.base_amount == 6000
    assert line.calculated_amount == 0


def test_month_helpers():
    assert parse_month("2025-7") == "2025-07"
    assert month_label("2025-03") == "03"
    assert month_of("2025-12-31") == "2025-12"
    start, end = month_bounds("2025-12")
    assert (start.isoformat(), end.isoformat()) == ("2025-12-01", "2026-01-01")


@pytest.mark.parametrize("bad", ["2025-13", "July", "", None])
def test_invalid_months_are_rejected(bad):
    with pytest.raises(ValueError):
        parse_month(bad)


def test_default_rate_with_bike_over_ten_days():
    records = [record(1, "present")] * 10
    line = calculate_tuition(student(daily_rate=0, bike=True), records, SETTINGS, finalized=True)
    assert line.calculated_amount == 25000
