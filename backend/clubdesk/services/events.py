from sqlalchemy.exc import SQLAlchemyError
from clubdesk.extensions import db
from clubdesk.errors import StoreError
from clubdesk.models import Event, Transaction, TransactionType
from clubdesk.services.ledger import EVENT_CATEGORY
from clubdesk.services.tuition import parse_date
from clubdesk.utils.audit import log_event
from clubdesk.utils.serialization import to_dict

INT_FIELDS = ("trial_participants", "trial_fee", "contest_entries", "contest_fee", "actual_revenue")


def serialize_event(event):
    data = to_dict(event, include_relationships=True)
    data["calculated_revenue"] = event.calculated_revenue
    return data


def list_events():
    return Event.query.order_by(Event.date.desc(), Event.id.desc()).all()


def _apply_fields(event, data):
    name = (data.get("name", event.name) or "").strip()
    if not name:
        raise ValueError("Event name is required")
    if not data.get("date") and not event.date:
        raise ValueError("Event date is required")

    event.name = name
    if data.get("date"):
        event.date = parse_date(data["date"])
    if "remarks" in data:
        event.remarks = data.get("remarks") or None

    for field in INT_FIELDS:
        if field in data:
            try:
                value = int(data.get(field) or 0)
            except (TypeError, ValueError):
                raise ValueError(f"{field} must be an integer")
            if value < 0:
                raise ValueError(f"{field} cannot be negative")
            setattr(event, field, value)


def _linked_transaction(event):
    if not event.transaction_id:
        return None
    tx = db.session.get(Transaction, event.transaction_id)
    if tx is None or tx.category != EVENT_CATEGORY:
        return None
    return tx


def save_event(data, event=None):
    """
    Creates or updates an event together with its income row in the ledger.
    The ledger row is created on first save and updated in place afterwards.
    """
    event = event or Event(
        trial_participants=0, trial_fee=2000, contest_entries=0, contest_fee=1000, actual_revenue=0
    )
    _apply_fields(event, data)

    tx = _linked_transaction(event)
    if tx is None:
        tx = Transaction(type=TransactionType.income)
        db.session.add(tx)

    tx.date = event.date
    tx.type = TransactionType.income
    tx.category = EVENT_CATEGORY
    tx.amount = event.actual_revenue or 0
    tx.title = f"{event.name} 収支"
    tx.memo = f"参加体験: {event.trial_participants}人, エントリー: {event.contest_entries}人"

    try:
        db.session.flush()
        event.transaction_id = tx.id
        db.session.add(event)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StoreError("Failed to save event", details=str(e))

    log_event("EVENT_SAVED", entity=f"event:{event.id}", amount=tx.amount, description=event.name)
    return event


def delete_event(event):
    tx = _linked_transaction(event)
    event_id = event.id
    try:
        db.session.delete(event)
        if tx is not None:
            db.session.delete(tx)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StoreError("Failed to delete event", details=str(e))

    log_event("EVENT_DELETED", entity=f"event:{event_id}", description="linked transaction removed" if tx else None)
