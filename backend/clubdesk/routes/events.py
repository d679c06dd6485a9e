from flask import Blueprint, request, jsonify
from clubdesk.extensions import db, limiter
from clubdesk.models import Event
from clubdesk.services import events as events_service

events_bp = Blueprint("events", __name__)


@events_bp.route('/list', methods=['GET'])
def list_events():
    return jsonify([events_service.serialize_event(e) for e in events_service.list_events()]), 200


@events_bp.route('/<int:event_id>', methods=['GET'])
def get_event(event_id):
    event = db.get_or_404(Event, event_id)
    return jsonify(events_service.serialize_event(event)), 200


@events_bp.route('/create', methods=['POST'])
@limiter.limit("30 per minute")
def create_event():
    data = request.get_json(silent=True) or {}
    if not data.get('name') or not data.get('date'):
        return jsonify({"error": "Event name and date are required"}), 400

    try:
        event = events_service.save_event(data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"message": "Event saved and recorded in accounting", "event": events_service.serialize_event(event)}), 201


@events_bp.route('/update/<int:event_id>', methods=['PUT'])
@limiter.limit("30 per minute")
def update_event(event_id):
    event = db.get_or_404(Event, event_id)
    data = request.get_json(silent=True) or {}

    try:
        event = events_service.save_event(data, event=event)
    except ValueError as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 400

    return jsonify({"message": "Event saved and recorded in accounting", "event": events_service.serialize_event(event)}), 200


@events_bp.route('/remove/<int:event_id>', methods=['DELETE'])
def delete_event(event_id):
    event = db.get_or_404(Event, event_id)
    events_service.delete_event(event)
    return jsonify({"message": "Event and its accounting record deleted"}), 200
