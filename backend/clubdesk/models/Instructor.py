from datetime import datetime
from clubdesk.extensions import db
from .base import SoftDeleteMixin

class Instructor(db.Model, SoftDeleteMixin):
    __tablename__ = 'instructors'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    furigana = db.Column(db.String(100), nullable=False, default="", index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    attendance_records = db.relationship('AttendanceRecord', back_populates='instructor', lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "furigana": self.furigana,
        }
