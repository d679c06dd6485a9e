from datetime import datetime
from clubdesk.extensions import db

class Event(db.Model):
    __tablename__ = 'events'

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)

    trial_participants = db.Column(db.Integer, default=0, nullable=False)
    trial_fee = db.Column(db.Integer, default=2000, nullable=False)
    contest_entries = db.Column(db.Integer, default=0, nullable=False)
    contest_fee = db.Column(db.Integer, default=1000, nullable=False)
    actual_revenue = db.Column(db.Integer, default=0, nullable=False)
    remarks = db.Column(db.Text, nullable=True)

    transaction_id = db.Column(
        db.Integer, db.ForeignKey('transactions.id', ondelete='SET NULL'), nullable=True
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    transaction = db.relationship('Transaction')

    @property
    def calculated_revenue(self):
        return (self.trial_participants or 0) * (self.trial_fee or 0) + \
            (self.contest_entries or 0) * (self.contest_fee or 0)
