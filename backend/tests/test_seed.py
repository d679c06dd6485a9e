from datetime import date
from sqlalchemy import text
from clubdesk.extensions import db
from clubdesk.models import AttendanceRecord, Student, Transaction, TransactionType, TuitionPayment
from clubdesk.seed import seed_data


def test_sqlite_enforces_foreign_keys(app):
    assert db.session.execute(text("PRAGMA foreign_keys")).scalar() == 1


def test_seed_clears_payments_of_removed_students(app, roster):
    tx = Transaction(date=date(2025, 8, 1), type=TransactionType.income, category="スクール月謝",
                     amount=6000, title="月謝受領: 山田 太郎", memo="07月分 (出席: 3日)")
    db.session.add(tx)
    db.session.flush()
    db.session.add(TuitionPayment(student_id=roster["taro"].id, month="2025-07", is_paid=True,
                                  amount=6000, transaction_id=tx.id))
    db.session.commit()

    counts = seed_data(month_start=date(2025, 7, 1))

    assert TuitionPayment.query.count() == 0
    assert Student.query.count() == counts["students"] == 3
    assert AttendanceRecord.query.count() == counts["attendance"]
    # the ledger is left alone
    assert Transaction.query.count() == 1
