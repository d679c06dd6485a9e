"""
Attendance ledger access: the daily roster snapshot, the monthly grid and
single-cell edits. Every write refuses to touch a finalized month.
"""
from sqlalchemy.exc import SQLAlchemyError
from clubdesk.extensions import db
from clubdesk.errors import StoreError
from clubdesk.models import AttendanceRecord, AttendanceStatus, Student, Instructor
from clubdesk.services.finalization import ensure_editable, get_status
from clubdesk.services.tuition import parse_date, parse_month, month_bounds

STUDENT = "student"
INSTRUCTOR = "instructor"
SUBJECT_TYPES = (STUDENT, INSTRUCTOR)

NONE = "none"
STATUSES = {s.value for s in AttendanceStatus}

# Grid cell cycles; None means "no record"
INSTRUCTOR_CYCLE = {None: "present", "present": "late", "late": "absent", "absent": None}
STUDENT_CYCLE = {None: "present", "present": "absent", "absent": None, "late": "present"}

LATE_WEIGHT = 0.5


def _subject_column(subject_type):
    if subject_type == STUDENT:
        return AttendanceRecord.student_id
    if subject_type == INSTRUCTOR:
        return AttendanceRecord.instructor_id
    raise ValueError(f"Unknown subject type '{subject_type}'")


def _get_subject(subject_type, subject_id):
    if subject_type not in SUBJECT_TYPES:
        raise ValueError(f"Unknown subject type '{subject_type}'")
    model = Student if subject_type == STUDENT else Instructor
    return db.get_or_404(model, subject_id, description=f"{subject_type.title()} not found")


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StoreError(f"Failed to {action}", details=str(e))


def active_students():
    return Student.query.filter(Student.deleted == False).order_by(Student.furigana, Student.id).all()


def active_instructors():
    return Instructor.query.filter(Instructor.deleted == False).order_by(Instructor.furigana, Instructor.id).all()


def records_between(start, end, students_only=False):
    query = AttendanceRecord.query.filter(
        AttendanceRecord.date >= start,
        AttendanceRecord.date < end
    )
    if students_only:
        query = query.filter(AttendanceRecord.student_id.isnot(None))
    return query.order_by(AttendanceRecord.date).all()


def records_for_month(month, students_only=False):
    start, end = month_bounds(month)
    return records_between(start, end, students_only=students_only)


def location_for_date(day):
    record = AttendanceRecord.query.filter(
        AttendanceRecord.date == day,
        AttendanceRecord.location.isnot(None),
        AttendanceRecord.location != ""
    ).order_by(AttendanceRecord.id.desc()).first()
    return record.location if record else ""


def get_daily(day):
    day = parse_date(day)
    records = AttendanceRecord.query.filter_by(date=day).all()

    students = {}
    instructors = {}
    for r in records:
        if r.student_id and r.status == "present":
            students[r.student_id] = True
        if r.instructor_id:
            instructors[r.instructor_id] = r.status

    return {
        "date": day.isoformat(),
        "location": location_for_date(day) if records else "",
        "students": students,
        "instructors": instructors,
        "finalization": get_status(day.strftime("%Y-%m")),
    }


def _normalize_keys(mapping, name):
    if mapping is None:
        return {}
    if not isinstance(mapping, dict):
        raise ValueError(f"{name} must be an object keyed by id")
    try:
        return {int(k): v for k, v in mapping.items()}
    except (TypeError, ValueError):
        raise ValueError(f"{name} keys must be numeric ids")


def save_daily(day, student_presence=None, instructor_status=None, location=""):
    """
    Replaces the whole day's attendance with a snapshot of the current roster.

    Every active student gets present/absent from ``student_presence`` and every
    active instructor gets present/late/absent from ``instructor_status`` (absent
    when missing). The delete and the inserts share one transaction.
    """
    day = parse_date(day)
    ensure_editable(day)

    student_presence = _normalize_keys(student_presence, "students")
    instructor_status = _normalize_keys(instructor_status, "instructors")
    for status in instructor_status.values():
        if status not in STATUSES:
            raise ValueError(f"Invalid instructor status '{status}'")

    location = (location or "").strip()
    records = [
        AttendanceRecord(
            student_id=s.id,
            date=day,
            status="present" if student_presence.get(s.id) else "absent",
            location=location
        )
        for s in active_students()
    ]
    records += [
        AttendanceRecord(
            instructor_id=i.id,
            date=day,
            status=instructor_status.get(i.id) or "absent",
            location=location
        )
        for i in active_instructors()
    ]

    try:
        AttendanceRecord.query.filter_by(date=day).delete()
        db.session.add_all(records)
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StoreError("Failed to save daily attendance", details=str(e))
    _commit("save daily attendance")

    return get_daily(day)


def get_monthly_grid(month):
    month = parse_month(month)
    records = records_for_month(month)

    grid = {STUDENT: {}, INSTRUCTOR: {}}
    totals = {STUDENT: {}, INSTRUCTOR: {}}
    dates = set()
    locations = {}

    for r in records:
        subject_type = STUDENT if r.student_id else INSTRUCTOR
        subject_id = r.student_id or r.instructor_id
        day = r.date.isoformat()

        grid[subject_type].setdefault(subject_id, {})[day] = r.to_dict()
        dates.add(day)
        if r.location:
            locations[day] = r.location

        # display totals only; billing counts present days
        if r.status == "present":
            totals[subject_type][subject_id] = totals[subject_type].get(subject_id, 0) + 1
        elif r.status == "late":
            totals[subject_type][subject_id] = totals[subject_type].get(subject_id, 0) + LATE_WEIGHT

    return {
        "month": month,
        "students": [s.to_dict() for s in active_students()],
        "instructors": [i.to_dict() for i in active_instructors()],
        "attendance": grid,
        "active_dates": sorted(dates),
        "locations": locations,
        "totals": totals,
        "finalization": get_status(month),
    }


def _find_record(subject_type, subject_id, day):
    return AttendanceRecord.query.filter(
        _subject_column(subject_type) == subject_id,
        AttendanceRecord.date == day
    ).first()


def _apply_status(subject_type, subject_id, day, record, status):
    if status is None:
        if record and record.id:
            db.session.delete(record)
            _commit("clear attendance cell")
        return None

    location = location_for_date(day)
    if not record:
        record = AttendanceRecord(date=day)
        if subject_type == STUDENT:
            record.student_id = subject_id
        else:
            record.instructor_id = subject_id
        db.session.add(record)

    record.status = status
    record.location = location
    _commit("update attendance cell")
    return record.to_dict()


def cycle_cell(subject_type, subject_id, day):
    """
    Advances one grid cell to its next status.
    Instructors: none -> present -> late -> absent -> none.
    Students: none -> present -> absent -> none.
    Returns the stored record, or None when the cell was cleared.
    """
    day = parse_date(day)
    _get_subject(subject_type, subject_id)
    ensure_editable(day)

    record = _find_record(subject_type, subject_id, day)
    cycle = INSTRUCTOR_CYCLE if subject_type == INSTRUCTOR else STUDENT_CYCLE
    current = record.status if record else None
    return _apply_status(subject_type, subject_id, day, record, cycle.get(current, "present"))


def set_cell(subject_type, subject_id, day, status):
    """Sets one grid cell to an explicit status, or clears it with 'none'."""
    day = parse_date(day)
    if status in (None, "", NONE):
        status = None
    elif status not in STATUSES:
        raise ValueError(f"Invalid status '{status}'")

    _get_subject(subject_type, subject_id)
    ensure_editable(day)

    record = _find_record(subject_type, subject_id, day)
    return _apply_status(subject_type, subject_id, day, record, status)


def location_history():
    rows = db.session.query(AttendanceRecord.location).filter(
        AttendanceRecord.location.isnot(None),
        AttendanceRecord.location != ""
    ).distinct().order_by(AttendanceRecord.location).all()
    return [row.location for row in rows]
