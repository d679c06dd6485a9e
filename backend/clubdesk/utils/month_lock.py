from functools import wraps
from flask import request, jsonify
from clubdesk.services.finalization import is_finalized
from clubdesk.services.tuition import month_of

def _requested_month(param_name):
    value = request.args.get(param_name)
    if value is None and request.is_json:
        value = (request.get_json(silent=True) or {}).get(param_name)
    if not value:
        return None
    return month_of(value)

def month_lock_guard(param_name="date"):
    """
    Refuses the request with 409 when the month owning ``param_name`` is finalized.
    ``param_name`` may hold a YYYY-MM-DD date or a YYYY-MM month, in the query string or JSON body.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                month = _requested_month(param_name)
            except ValueError:
                return jsonify({"error": f"Invalid {param_name}"}), 400

            if not month:
                return jsonify({"error": f"Missing {param_name}"}), 400

            if is_finalized(month):
                return jsonify({"error": f"Attendance for {month} is finalized and can no longer be changed"}), 409

            return fn(*args, **kwargs)
        return wrapper
    return decorator
