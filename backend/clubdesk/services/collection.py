"""
Tuition collection workflow.

Marking a student's month as paid writes an income row into the accounting
ledger and a TuitionPayment row pointing at it; unmarking removes both. The
payment keeps an explicit transaction_id, and the title/memo correlation key is
still honoured for ledger rows written before that link existed.
"""
from datetime import date, datetime
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from clubdesk.extensions import db
from clubdesk.errors import NothingToCollectError, StoreError
from clubdesk.models import Student, Transaction, TransactionType, TuitionPayment
from clubdesk.services import ledger
from clubdesk.services.attendance import active_students, records_for_month
from clubdesk.services.finalization import is_finalized
from clubdesk.services.settings import get_tuition_settings
from clubdesk.services.tuition import calculate_tuition, parse_month
from clubdesk.utils.audit import log_event


def _payments_by_student(month):
    payments = TuitionPayment.query.filter_by(month=month).all()
    return {p.student_id: p for p in payments}


def _attach_payment(line, payment):
    line.is_paid = bool(payment and payment.is_paid)
    line.payment_id = payment.id if payment else None
    return line


def tuition_line(student, month):
    """Current tuition line for one student, with payment state attached."""
    month = parse_month(month)
    records = [r for r in records_for_month(month, students_only=True) if r.student_id == student.id]
    line = calculate_tuition(student, records, get_tuition_settings(), is_finalized(month))
    payment = TuitionPayment.query.filter_by(student_id=student.id, month=month).first()
    return _attach_payment(line, payment)


def tuition_view(month):
    """
    Per-student tuition for a month. While the month is not finalized no amounts
    are returned; the caller is pointed back at the finalize action instead.
    """
    month = parse_month(month)
    if not is_finalized(month):
        return {
            "month": month,
            "is_finalized": False,
            "students": [],
            "collected_total": 0,
            "uncollected_total": 0,
            "message": f"Attendance for {month} has not been finalized yet. Finalize it before collecting tuition.",
            "finalize_url": f"/attendance/finalize?month={month}",
        }

    settings = get_tuition_settings()
    records = records_for_month(month, students_only=True)
    payments = _payments_by_student(month)

    lines = [
        _attach_payment(calculate_tuition(s, records, settings, True), payments.get(s.id))
        for s in active_students()
    ]

    return {
        "month": month,
        "is_finalized": True,
        "settings": {
            "default_daily_rate": settings.default_daily_rate,
            "bike_rental_fee": settings.bike_rental_fee,
        },
        "students": [line.to_dict() for line in lines],
        "collected_total": sum(l.calculated_amount for l in lines if l.is_paid),
        "uncollected_total": sum(l.calculated_amount for l in lines if not l.is_paid),
    }


def _linked_transaction(payment, student):
    """
    Ledger row the payment links to, or None when the link is missing or no
    longer points at this student's tuition income.
    """
    if not (payment and payment.transaction_id):
        return None
    tx = db.session.get(Transaction, payment.transaction_id)
    if tx is None or tx.type != TransactionType.income:
        return None
    if tx.category not in ledger.TUITION_CATEGORIES or tx.title != ledger.tuition_title(student.name):
        current_app.logger.warning(
            "Payment %s links to transaction %s which is not tuition for %s, ignoring link",
            payment.id, tx.id, student.name
        )
        return None
    return tx


def mark_as_paid(student_id, month, today=None):
    """
    Records the month's tuition as collected.

    1. reuse the ledger row already linked to the payment, or one matching the
       correlation key (title, memo, amount), so a retry never books twice;
    2. otherwise add an income row dated today (not the tuition month);
    3. upsert the TuitionPayment for (student, month) pointing at that row.

    Raises NothingToCollectError when the calculated amount is not positive,
    which includes every month that is not finalized.
    """
    month = parse_month(month)
    student = db.get_or_404(Student, student_id, description="Student not found")
    line = tuition_line(student, month)

    if line.calculated_amount <= 0:
        raise NothingToCollectError(student.name, month)

    title = ledger.tuition_title(student.name)
    memo = ledger.tuition_memo(month, line.days_count)
    payment = TuitionPayment.query.filter_by(student_id=student.id, month=month).first()

    try:
        tx = _linked_transaction(payment, student)
        if tx is not None:
            tx.amount = line.calculated_amount
            tx.memo = memo
        else:
            existing = ledger.find_tuition_transactions(student.name, month, line.days_count, line.calculated_amount)
            if existing:
                tx = existing[0]
                current_app.logger.info("Tuition transaction %s already exists, skipping creation", tx.id)

        if tx is None:
            tx = Transaction(
                date=today or date.today(),
                type=TransactionType.income,
                category=ledger.TUITION_CATEGORY,
                amount=line.calculated_amount,
                title=title,
                memo=memo,
            )
            db.session.add(tx)
            db.session.flush()

        if payment is None:
            payment = TuitionPayment(student_id=student.id, month=month)
            db.session.add(payment)

        payment.is_paid = True
        payment.amount = line.calculated_amount
        payment.paid_at = datetime.utcnow()
        payment.transaction_id = tx.id
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error("Failed to mark tuition paid for student %s (%s): %s", student.id, month, e)
        raise StoreError("Failed to record tuition payment", details=str(e))

    log_event(
        "TUITION_PAID",
        entity=f"student:{student.id}",
        month=month,
        amount=line.calculated_amount,
        description=f"{title} / {memo} -> transaction {tx.id}",
    )
    return _attach_payment(line, payment)


def unmark_as_paid(student_id, month):
    """
    Reverses a collection: deletes the TuitionPayment row, the ledger row it
    links to and any ledger row matching the correlation key under either
    tuition category. Repeating it deletes nothing and is harmless.
    """
    month = parse_month(month)
    student = db.get_or_404(Student, student_id, description="Student not found")
    line = tuition_line(student, month)
    payment = TuitionPayment.query.filter_by(student_id=student.id, month=month).first()

    removed = []
    try:
        linked = _linked_transaction(payment, student)
        if payment is not None:
            db.session.delete(payment)

        stale = ledger.find_tuition_transactions(student.name, month, line.days_count)
        for tx in ([linked] if linked else []) + stale:
            if tx.id not in removed:
                removed.append(tx.id)
                db.session.delete(tx)

        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error("Failed to unmark tuition for student %s (%s): %s", student.id, month, e)
        raise StoreError("Failed to reverse tuition payment", details=str(e))

    log_event(
        "TUITION_UNPAID",
        entity=f"student:{student.id}",
        month=month,
        description=f"removed transactions {removed or 'none'}",
    )
    return _attach_payment(line, None)
