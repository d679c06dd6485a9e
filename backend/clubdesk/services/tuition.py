"""
Tuition calculation.

Everything in here is a pure derivation: given a student's attendance for a month,
the global tuition settings and whether the month is finalized, work out how many
days are billed and how much is owed.
"""
from dataclasses import dataclass, asdict
from typing import Optional
from datetime import date, datetime

MONTH_FORMAT = "%Y-%m"
DATE_FORMAT = "%Y-%m-%d"
BILLABLE_STATUS = "present"


@dataclass
class TuitionLine:
    student_id: int
    name: str
    furigana: str
    has_bike_rental: bool
    days_count: int
    effective_daily_rate: int
    base_amount: int
    bike_amount: int
    calculated_amount: int
    is_paid: bool = False
    payment_id: Optional[int] = None

    def to_dict(self):
        return asdict(self)


def parse_month(month):
    """Validates a YYYY-MM key and returns it normalized."""
    if not isinstance(month, str):
        raise ValueError("month must be a YYYY-MM string")
    try:
        return datetime.strptime(month.strip(), MONTH_FORMAT).strftime(MONTH_FORMAT)
    except ValueError:
        raise ValueError(f"Invalid month '{month}', use YYYY-MM")


def parse_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"Invalid date '{value}', use YYYY-MM-DD")


def month_of(value):
    """Month key owning a date, or the month key itself."""
    if isinstance(value, (date, datetime)):
        return value.strftime(MONTH_FORMAT)
    value = str(value).strip()
    if len(value) == 7:
        return parse_month(value)
    return parse_date(value).strftime(MONTH_FORMAT)


def month_bounds(month):
    """Returns [first day of month, first day of next month)."""
    start = datetime.strptime(parse_month(month), MONTH_FORMAT).date()
    if start.month == 12:
        end = date(start.year + 1, 1, 1)
    else:
        end = date(start.year, start.month + 1, 1)
    return start, end


def month_label(month):
    """Two digit month part of a YYYY-MM key, as used in ledger memos."""
    return parse_month(month).split("-")[1]


def effective_daily_rate(student, settings):
    rate = student.daily_rate or 0
    return rate if rate > 0 else settings.default_daily_rate


def count_billable_days(student_id, records):
    return sum(
        1 for r in records
        if r.student_id == student_id and r.status == BILLABLE_STATUS
    )


def calculate_tuition(student, records, settings, finalized):
    """
    Computes the tuition owed by one student for one month.

    Args:
      student: object with id, name, furigana, daily_rate, has_bike_rental
      records: attendance records of the month (other subjects are ignored)
      settings: TuitionSettings with default_daily_rate and bike_rental_fee
      finalized: whether the month's attendance is finalized

    Returns:
      TuitionLine. calculated_amount is 0 while the month is not finalized.
    """
    days_count = count_billable_days(student.id, records)
    rate = effective_daily_rate(student, settings)
    base_amount = days_count * rate
    bike_amount = settings.bike_rental_fee if student.has_bike_rental else 0

    return TuitionLine(
        student_id=student.id,
        name=student.name,
        furigana=student.furigana,
        has_bike_rental=bool(student.has_bike_rental),
        days_count=days_count,
        effective_daily_rate=rate,
        base_amount=base_amount,
        bike_amount=bike_amount,
        calculated_amount=(base_amount + bike_amount) if finalized else 0,
    )
