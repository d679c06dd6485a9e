import logging
import os
from datetime import datetime
from flask import current_app, has_app_context

DEFAULT_AUDIT_LOG_FILE = os.path.join("logs", "audit.log")

def _audit_log_file():
    if has_app_context():
        return current_app.config.get("AUDIT_LOG_FILE") or DEFAULT_AUDIT_LOG_FILE
    return DEFAULT_AUDIT_LOG_FILE

def log_event(event_type, entity=None, month=None, amount=None, ip=None, description=None, level="INFO"):
    """
    Appends a bookkeeping event to the audit log file and mirrors it to the app logger.

    Parameters:
        event_type (str): The type of the event (e.g., TUITION_PAID, MONTH_FINALIZED).
        entity (str|None): What the event is about, e.g. "student:12" or "event:3".
        month (str|None): The YYYY-MM month the event belongs to, if any.
        amount (int|None): JPY amount moved by the event, if any.
        ip (str|None): Remote address of the request, if available.
        description (str|None): Additional context.
        level (str): Log level (e.g., INFO, WARNING, ERROR).
    """
    path = _audit_log_file()
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    timestamp = datetime.utcnow().strftime('%Y-%m-%d %H:%M:%S')
    log_entry = (
        f"[{timestamp}] [{level.upper()}] EVENT: {event_type} | "
        f"ENTITY: {entity or 'N/A'} | MONTH: {month or 'N/A'} | "
        f"AMOUNT: {amount if amount is not None else 'N/A'} | "
        f"IP: {ip or 'N/A'} | DESC: {description or 'N/A'}\n"
    )

    with open(path, "a", encoding="utf-8") as log_file:
        log_file.write(log_entry)

    if has_app_context():
        current_app.logger.log(logging.getLevelName(level.upper()), log_entry.strip())
