from datetime import datetime
from clubdesk.extensions import db
import enum

class SoftDeleteMixin:
    deleted = db.Column(db.Boolean, default=False, nullable=False)
    deleted_at = db.Column(db.DateTime)

    def soft_delete(self):
        self.deleted = True
        self.deleted_at = datetime.utcnow()

    def restore(self):
        self.deleted = False
        self.deleted_at = None

class AttendanceStatus(enum.Enum):
    present = "present"
    absent = "absent"
    late = "late"

class TransactionType(enum.Enum):
    income = "income"
    expense = "expense"
