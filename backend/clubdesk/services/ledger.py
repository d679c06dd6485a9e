"""
Accounting ledger: the flat income/expense log that tuition collection and
event revenue write into.
"""
from datetime import date
from sqlalchemy import func, case
from sqlalchemy.exc import SQLAlchemyError
from clubdesk.extensions import db
from clubdesk.errors import StoreError
from clubdesk.models import Event, Transaction, TransactionType, TuitionPayment
from clubdesk.services.tuition import parse_date, month_label, month_bounds
from clubdesk.utils.serialization import to_dict

TUITION_CATEGORY = "スクール月謝"
# older rows were written under the previous category name
TUITION_CATEGORIES = (TUITION_CATEGORY, "スクール月謝収入")
EVENT_CATEGORY = "イベント"
DEFAULT_CATEGORY = "なし"

INCOME_CATEGORIES = ("イベントギャラ", TUITION_CATEGORY, "物販", "その他")
EXPENSE_CATEGORIES = ("会場代", "備品購入", "広告費", "交通費", "その他")


def tuition_title(student_name):
    return f"月謝受領: {student_name}"


def tuition_memo(month, days_count):
    return f"{month_label(month)}月分 (出席: {days_count}日)"


def find_tuition_transactions(student_name, month, days_count, amount=None):
    """Ledger rows matching the tuition correlation key, in either category spelling."""
    query = Transaction.query.filter(
        Transaction.category.in_(TUITION_CATEGORIES),
        Transaction.title == tuition_title(student_name),
        Transaction.memo == tuition_memo(month, days_count)
    )
    if amount is not None:
        query = query.filter(Transaction.amount == amount)
    return query.order_by(Transaction.id).all()


def parse_transaction_type(value):
    try:
        return TransactionType(value)
    except ValueError:
        raise ValueError(f"Invalid transaction type '{value}', use income or expense")


def parse_amount(value):
    try:
        amount = int(value)
    except (TypeError, ValueError):
        raise ValueError("amount must be an integer JPY amount")
    if amount <= 0:
        raise ValueError("amount must be positive")
    return amount


def build_transaction(data):
    """Validates a payload and returns an unsaved Transaction."""
    title = (data.get("title") or "").strip()
    if not title:
        raise ValueError("title is required")

    return Transaction(
        date=parse_date(data.get("date") or date.today()),
        type=parse_transaction_type(data.get("type", "income")),
        category=(data.get("category") or DEFAULT_CATEGORY).strip(),
        amount=parse_amount(data.get("amount")),
        title=title,
        memo=data.get("memo") or None,
    )


def add_transaction(data):
    tx = build_transaction(data)
    db.session.add(tx)
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StoreError("Failed to save transaction", details=str(e))
    return tx


def delete_transaction(tx):
    """Deletes a ledger row and clears any tuition payment or event still pointing at it."""
    try:
        TuitionPayment.query.filter_by(transaction_id=tx.id).update({"transaction_id": None})
        Event.query.filter_by(transaction_id=tx.id).update({"transaction_id": None})
        db.session.delete(tx)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StoreError("Failed to delete transaction", details=str(e))


def list_transactions(year=None, month=None):
    query = Transaction.query
    if year:
        query = query.filter(Transaction.date >= date(year, 1, 1), Transaction.date < date(year + 1, 1, 1))
    if month:
        start, end = month_bounds(month)
        query = query.filter(Transaction.date >= start, Transaction.date < end)
    return query.order_by(Transaction.date.desc(), Transaction.created_at.desc(), Transaction.id.desc()).all()


def serialize_transaction(tx):
    return to_dict(tx)


def _net(query_filter=None):
    signed = case(
        (Transaction.type == TransactionType.income, Transaction.amount),
        else_=-Transaction.amount
    )
    query = db.session.query(func.coalesce(func.sum(signed), 0))
    if query_filter is not None:
        query = query.filter(query_filter)
    return int(query.scalar() or 0)


def _total(tx_type, start, end):
    total = db.session.query(func.coalesce(func.sum(Transaction.amount), 0)).filter(
        Transaction.type == tx_type,
        Transaction.date >= start,
        Transaction.date < end
    ).scalar()
    return int(total or 0)


def summary(today=None):
    """All-time balance plus this month's income and expense totals."""
    today = today or date.today()
    start, end = month_bounds(today.strftime("%Y-%m"))
    return {
        "balance": _net(),
        "income_total": _total(TransactionType.income, start, end),
        "expense_total": _total(TransactionType.expense, start, end),
        "month": start.strftime("%Y-%m"),
    }


def yearly_balance(year):
    """
    Yearly statement. The net of all earlier years is carried over and counted
    as income of the requested year.
    """
    start = date(year, 1, 1)
    end = date(year + 1, 1, 1)

    carryover = _net(Transaction.date < start)
    transactions = Transaction.query.filter(
        Transaction.date >= start,
        Transaction.date < end
    ).order_by(Transaction.date, Transaction.id).all()

    total_income = sum(t.amount for t in transactions if t.type == TransactionType.income) + carryover
    total_expense = sum(t.amount for t in transactions if t.type == TransactionType.expense)

    return {
        "year": year,
        "carryover_balance": carryover,
        "total_income": total_income,
        "total_expense": total_expense,
        "balance": total_income - total_expense,
        "transactions": [serialize_transaction(t) for t in transactions],
    }
