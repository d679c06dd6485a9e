from flask import Blueprint, request, jsonify
from clubdesk.services import settings as settings_service

settings_bp = Blueprint("settings", __name__)


@settings_bp.route('', methods=['GET'])
def get_settings():
    effective = settings_service.get_tuition_settings()
    return jsonify({
        "values": settings_service.list_settings(),
        "tuition": {
            "default_daily_rate": effective.default_daily_rate,
            "bike_rental_fee": effective.bike_rental_fee,
        }
    }), 200


@settings_bp.route('', methods=['PUT'])
def update_settings():
    data = request.get_json(silent=True)

    try:
        values = settings_service.update_settings(data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"message": "Settings saved", "values": values}), 200
