from enum import Enum
from datetime import datetime, date
from sqlalchemy.inspection import inspect

# soft delete bookkeeping never leaves the API
HIDDEN_FIELDS = ("deleted", "deleted_at")


def _json_value(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def to_dict(model_instance, include_relationships=False, include_hidden=False, exclude=()):
    """
    Column values of a model as JSON-ready data. Enum columns (TransactionType)
    become their value, dates become ISO strings. Relationships are expanded one
    level deep when asked for, e.g. an event with its ledger row.
    """
    mapper = inspect(model_instance.__class__)
    skipped = set(exclude) | (set() if include_hidden else set(HIDDEN_FIELDS))

    output = {
        column.key: _json_value(getattr(model_instance, column.key))
        for column in mapper.columns
        if column.key not in skipped
    }

    if include_relationships:
        for rel in mapper.relationships:
            related = getattr(model_instance, rel.key)
            if rel.uselist:
                output[rel.key] = [to_dict(item) for item in related]
            else:
                output[rel.key] = to_dict(related) if related is not None else None

    return output
