from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from clubdesk.extensions import db
from clubdesk.errors import MonthFinalizedError, StoreError
from clubdesk.models import MonthlyFinalization
from clubdesk.services.tuition import parse_month, month_of


def get_finalization(month):
    return MonthlyFinalization.query.filter_by(month=parse_month(month)).first()


def is_finalized(month):
    record = get_finalization(month)
    return record.is_finalized if record else False


def get_status(month):
    month = parse_month(month)
    record = get_finalization(month)
    return {
        "month": month,
        "is_finalized": record.is_finalized if record else False,
        "finalized_at": record.finalized_at.isoformat() if record and record.finalized_at else None,
    }


def finalize(month):
    """
    Locks a month's attendance. Finalizing twice keeps the first finalized_at.
    There is no unfinalize.
    """
    month = parse_month(month)
    record = get_finalization(month)

    if record and record.is_finalized:
        return get_status(month)

    if not record:
        record = MonthlyFinalization(month=month)
        db.session.add(record)

    record.is_finalized = True
    record.finalized_at = datetime.utcnow()
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StoreError("Failed to finalize month", details=str(e))

    return get_status(month)


def ensure_editable(value):
    """Raises MonthFinalizedError when the month owning ``value`` (date or YYYY-MM) is locked."""
    month = month_of(value)
    if is_finalized(month):
        raise MonthFinalizedError(month)
    return month
