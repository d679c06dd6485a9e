from datetime import datetime
from clubdesk.extensions import db
from .base import TransactionType

class Transaction(db.Model):
    __tablename__ = 'transactions'

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False, index=True)
    type = db.Column(db.Enum(TransactionType), nullable=False, index=True)
    category = db.Column(db.String(50), nullable=False, default="なし")
    amount = db.Column(db.Integer, nullable=False)
    title = db.Column(db.String(255), nullable=False)
    memo = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def signed_amount(self):
        return self.amount if self.type == TransactionType.income else -self.amount
