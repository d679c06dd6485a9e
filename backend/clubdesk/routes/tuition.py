from flask import Blueprint, request, jsonify
from clubdesk.extensions import limiter
from clubdesk.services import collection

tuition_bp = Blueprint("tuition", __name__)


def _month_param():
    data = request.get_json(silent=True) or {}
    return request.args.get('month') or data.get('month')


@tuition_bp.route('', methods=['GET'])
def tuition_overview():
    month = request.args.get('month')
    if not month:
        return jsonify({"error": "Provide month (e.g. ?month=2025-07)"}), 400

    try:
        return jsonify(collection.tuition_view(month)), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@tuition_bp.route('/<int:student_id>/pay', methods=['POST'])
@limiter.limit("30 per minute")
def mark_paid(student_id):
    month = _month_param()
    if not month:
        return jsonify({"error": "Missing month"}), 400

    try:
        line = collection.mark_as_paid(student_id, month)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"message": "Tuition collected and recorded in accounting", "tuition": line.to_dict()}), 200


@tuition_bp.route('/<int:student_id>/pay', methods=['DELETE'])
@limiter.limit("30 per minute")
def unmark_paid(student_id):
    month = _month_param()
    if not month:
        return jsonify({"error": "Missing month"}), 400

    try:
        line = collection.unmark_as_paid(student_id, month)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"message": "Tuition collection reversed", "tuition": line.to_dict()}), 200
