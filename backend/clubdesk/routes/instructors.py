from flask import Blueprint, request, jsonify
from clubdesk.extensions import db
from clubdesk.models import Instructor

instructors_bp = Blueprint("instructors", __name__)


@instructors_bp.route('/list', methods=['GET'])
def list_instructors():
    instructors = Instructor.query.filter(Instructor.deleted == False) \
        .order_by(Instructor.furigana, Instructor.id).all()
    return jsonify([i.to_dict() for i in instructors]), 200


@instructors_bp.route('/create', methods=['POST'])
def create_instructor():
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or "").strip()
    if not name:
        return jsonify({"error": "Name is required"}), 400

    instructor = Instructor(name=name, furigana=(data.get('furigana') or "").strip())
    db.session.add(instructor)
    db.session.commit()
    return jsonify({"message": "Instructor created", "instructor": instructor.to_dict()}), 201


@instructors_bp.route('/update/<int:instructor_id>', methods=['PUT'])
def update_instructor(instructor_id):
    instructor = Instructor.query.filter_by(id=instructor_id, deleted=False).first_or_404()
    data = request.get_json(silent=True) or {}

    if 'name' in data:
        name = (data.get('name') or "").strip()
        if not name:
            return jsonify({"error": "Name cannot be empty"}), 400
        instructor.name = name
    if 'furigana' in data:
        instructor.furigana = (data.get('furigana') or "").strip()

    db.session.commit()
    return jsonify({"message": "Instructor updated", "instructor": instructor.to_dict()}), 200


@instructors_bp.route('/remove/<int:instructor_id>', methods=['DELETE'])
def delete_instructor(instructor_id):
    instructor = Instructor.query.filter_by(id=instructor_id, deleted=False).first_or_404()
    instructor.soft_delete()
    db.session.commit()
    return jsonify({"message": "Instructor removed"}), 200
