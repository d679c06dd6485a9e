from dataclasses import dataclass
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from clubdesk.extensions import db
from clubdesk.errors import StoreError
from clubdesk.models import Setting

DEFAULT_DAILY_RATE_KEY = "default_daily_rate"
BIKE_RENTAL_FEE_KEY = "bike_rental_fee"

FALLBACK_DEFAULT_DAILY_RATE = 2000
FALLBACK_BIKE_RENTAL_FEE = 5000


@dataclass
class TuitionSettings:
    default_daily_rate: int = FALLBACK_DEFAULT_DAILY_RATE
    bike_rental_fee: int = FALLBACK_BIKE_RENTAL_FEE


def _parse_int(value, default):
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def _fallbacks():
    return (
        current_app.config.get("DEFAULT_DAILY_RATE", FALLBACK_DEFAULT_DAILY_RATE),
        current_app.config.get("DEFAULT_BIKE_RENTAL_FEE", FALLBACK_BIKE_RENTAL_FEE),
    )


def list_settings():
    return {s.key: s.value for s in Setting.query.order_by(Setting.key).all()}


def get_tuition_settings():
    raw = list_settings()
    rate_default, bike_default = _fallbacks()
    return TuitionSettings(
        default_daily_rate=_parse_int(raw.get(DEFAULT_DAILY_RATE_KEY), rate_default),
        bike_rental_fee=_parse_int(raw.get(BIKE_RENTAL_FEE_KEY), bike_default),
    )


def update_settings(values):
    """Upserts each key. Values are stored as text."""
    if not isinstance(values, dict) or not values:
        raise ValueError("Provide at least one setting")

    for key, value in values.items():
        if not key or not isinstance(key, str):
            raise ValueError("Setting keys must be non-empty strings")
        if key in (DEFAULT_DAILY_RATE_KEY, BIKE_RENTAL_FEE_KEY) and _parse_int(value, -1) < 0:
            raise ValueError(f"{key} must be a non-negative integer")

    for key, value in values.items():
        setting = Setting.query.filter_by(key=key).first()
        if not setting:
            setting = Setting(key=key)
            db.session.add(setting)
        setting.value = None if value is None else str(value)

    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StoreError("Failed to save settings", details=str(e))
    return list_settings()
