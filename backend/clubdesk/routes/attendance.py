from flask import Blueprint, request, jsonify
from clubdesk.extensions import limiter
from clubdesk.services import attendance as attendance_service
from clubdesk.services import finalization
from clubdesk.utils.audit import log_event
from clubdesk.utils.month_lock import month_lock_guard

attendance_bp = Blueprint("attendance", __name__)


@attendance_bp.route('/daily', methods=['GET'])
def get_daily():
    date_str = request.args.get('date')
    if not date_str:
        return jsonify({"error": "Missing required ?date=YYYY-MM-DD"}), 400

    try:
        return jsonify(attendance_service.get_daily(date_str)), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@attendance_bp.route('/daily', methods=['POST'])
@month_lock_guard("date")
def save_daily():
    data = request.get_json(silent=True) or {}

    try:
        result = attendance_service.save_daily(
            data.get('date'),
            student_presence=data.get('students'),
            instructor_status=data.get('instructors'),
            location=data.get('location', ""),
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"message": "Attendance saved", "attendance": result}), 200


@attendance_bp.route('/monthly', methods=['GET'])
def get_monthly():
    month = request.args.get('month')
    if not month:
        return jsonify({"error": "Provide month (e.g. ?month=2025-07)"}), 400

    try:
        return jsonify(attendance_service.get_monthly_grid(month)), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@attendance_bp.route('/cycle', methods=['POST'])
@month_lock_guard("date")
def cycle_cell():
    data = request.get_json(silent=True) or {}
    subject_type = data.get('subject_type')
    subject_id = data.get('subject_id')

    if subject_type not in attendance_service.SUBJECT_TYPES or subject_id is None:
        return jsonify({"error": "Provide subject_type (student|instructor), subject_id and date"}), 400

    try:
        record = attendance_service.cycle_cell(subject_type, int(subject_id), data.get('date'))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"record": record, "status": record["status"] if record else "none"}), 200


@attendance_bp.route('/cell', methods=['PUT'])
@month_lock_guard("date")
def set_cell():
    data = request.get_json(silent=True) or {}
    subject_type = data.get('subject_type')
    subject_id = data.get('subject_id')

    if subject_type not in attendance_service.SUBJECT_TYPES or subject_id is None:
        return jsonify({"error": "Provide subject_type (student|instructor), subject_id and date"}), 400

    try:
        record = attendance_service.set_cell(subject_type, int(subject_id), data.get('date'), data.get('status'))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"record": record, "status": record["status"] if record else "none"}), 200


@attendance_bp.route('/locations', methods=['GET'])
def locations():
    return jsonify(attendance_service.location_history()), 200


@attendance_bp.route('/finalization', methods=['GET'])
def finalization_status():
    month = request.args.get('month')
    if not month:
        return jsonify({"error": "Provide month (e.g. ?month=2025-07)"}), 400

    try:
        return jsonify(finalization.get_status(month)), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@attendance_bp.route('/finalize', methods=['POST'])
@limiter.limit("30 per minute")
def finalize_month():
    data = request.get_json(silent=True) or {}
    month = data.get('month') or request.args.get('month')
    if not month:
        return jsonify({"error": "Missing month"}), 400

    try:
        already = finalization.is_finalized(month)
        status = finalization.finalize(month)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    if not already:
        log_event("MONTH_FINALIZED", month=status["month"], ip=request.remote_addr)
    return jsonify({"message": f"Attendance for {status['month']} finalized", **status}), 200
