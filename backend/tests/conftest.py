from datetime import date
import pytest
from clubdesk import create_app
from clubdesk.config import TestingConfig
from clubdesk.extensions import db
from clubdesk.models import Student, Instructor, AttendanceRecord


@pytest.fixture
def app(tmp_path):
    app = create_app(TestingConfig)
    app.config["AUDIT_LOG_FILE"] = str(tmp_path / "audit.log")

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def audit_log(app):
    def read():
        try:
            with open(app.config["AUDIT_LOG_FILE"], encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return ""
    return read


@pytest.fixture
def roster(app):
    """Two students and two instructors."""
    taro = Student(name="山田 太郎", furigana="やまだ たろう", daily_rate=0, has_bike_rental=False)
    hanako = Student(name="佐藤 花子", furigana="さとう はなこ", daily_rate=2500, has_bike_rental=True)
    ken = Instructor(name="高橋 健", furigana="たかはし けん")
    misaki = Instructor(name="伊藤 美咲", furigana="いとう みさき")
    db.session.add_all([taro, hanako, ken, misaki])
    db.session.commit()
    return {"taro": taro, "hanako": hanako, "ken": ken, "misaki": misaki}


def add_attendance(student, days, status="present", location="市民体育館"):
    db.session.add_all([
        AttendanceRecord(student_id=student.id, date=d, status=status, location=location)
        for d in days
    ])
    db.session.commit()


def july(*days):
    return [date(2025, 7, d) for d in days]
