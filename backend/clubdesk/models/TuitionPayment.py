from datetime import datetime
from clubdesk.extensions import db

class TuitionPayment(db.Model):
    __tablename__ = 'tuition_payments'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id'), nullable=False)
    month = db.Column(db.String(7), nullable=False, index=True)  # YYYY-MM
    is_paid = db.Column(db.Boolean, default=False, nullable=False)
    amount = db.Column(db.Integer, nullable=False, default=0)
    paid_at = db.Column(db.DateTime, nullable=True)
    transaction_id = db.Column(
        db.Integer, db.ForeignKey('transactions.id', ondelete='SET NULL'), nullable=True
    )

    student = db.relationship('Student', back_populates='tuition_payments')
    transaction = db.relationship('Transaction')

    __table_args__ = (
        db.UniqueConstraint('student_id', 'month', name='uq_tuition_student_month'),
    )
