from datetime import date, timedelta
from clubdesk.extensions import db
from clubdesk.models import Student, Instructor, AttendanceRecord, Setting, TuitionPayment
from clubdesk.services.settings import DEFAULT_DAILY_RATE_KEY, BIKE_RENTAL_FEE_KEY


def seed_data(month_start=None):
    """
    Load a small demo roster and one week of attendance. Roster, attendance,
    tuition payments and settings are cleared first; the ledger and events are kept.
    """
    month_start = month_start or date.today().replace(day=1)

    # rows referencing students go first
    AttendanceRecord.query.delete()
    TuitionPayment.query.delete()
    Student.query.delete()
    Instructor.query.delete()
    Setting.query.delete()
    db.session.commit()

    db.session.add_all([
        Setting(key=DEFAULT_DAILY_RATE_KEY, value="2000"),
        Setting(key=BIKE_RENTAL_FEE_KEY, value="5000"),
    ])

    students = [
        Student(name="山田 太郎", furigana="やまだ たろう", daily_rate=0, has_bike_rental=False),
        Student(name="佐藤 花子", furigana="さとう はなこ", daily_rate=2500, has_bike_rental=True),
        Student(name="鈴木 一郎", furigana="すずき いちろう", daily_rate=0, has_bike_rental=True),
    ]
    instructors = [
        Instructor(name="高橋 健", furigana="たかはし けん"),
        Instructor(name="伊藤 美咲", furigana="いとう みさき"),
    ]
    db.session.add_all(students + instructors)
    db.session.flush()

    # weekend sessions in the first week
    records = []
    for offset in range(0, 7):
        day = month_start + timedelta(days=offset)
        if day.weekday() not in (5, 6):
            continue
        for student in students:
            records.append(AttendanceRecord(student_id=student.id, date=day, status="present", location="市民体育館"))
        records.append(AttendanceRecord(instructor_id=instructors[0].id, date=day, status="present", location="市民体育館"))
    db.session.add_all(records)
    db.session.commit()

    return {"students": len(students), "instructors": len(instructors), "attendance": len(records)}
