from datetime import datetime
from clubdesk.extensions import db
from .base import SoftDeleteMixin

class Student(db.Model, SoftDeleteMixin):
    __tablename__ = 'students'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    furigana = db.Column(db.String(100), nullable=False, default="", index=True)
    daily_rate = db.Column(db.Integer, nullable=False, default=0)  # 0 = use default_daily_rate
    has_bike_rental = db.Column(db.Boolean, nullable=False, default=False)
    birth_date = db.Column(db.Date, nullable=True)
    address = db.Column(db.String(255), nullable=True)
    emergency_contact = db.Column(db.String(100), nullable=True)
    emergency_relationship = db.Column(db.String(50), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    attendance_records = db.relationship('AttendanceRecord', back_populates='student', lazy=True)
    tuition_payments = db.relationship('TuitionPayment', back_populates='student', lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "furigana": self.furigana,
            "daily_rate": self.daily_rate or 0,
            "has_bike_rental": bool(self.has_bike_rental),
            "birth_date": self.birth_date.isoformat() if self.birth_date else None,
            "address": self.address,
            "emergency_contact": self.emergency_contact,
            "emergency_relationship": self.emergency_relationship,
        }
