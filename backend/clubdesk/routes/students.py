from datetime import datetime
from clubdesk.extensions import db
from clubdesk.models import Student
from flask import Blueprint, request, jsonify
from clubdesk.utils.pagination import apply_pagination_and_search

students_bp = Blueprint("students", __name__)


def _parse_birth_date(value):
    if not value:
        return None
    return datetime.strptime(value, "%Y-%m-%d").date()


def _parse_daily_rate(value):
    rate = int(value or 0)
    if rate < 0:
        raise ValueError("daily_rate cannot be negative")
    return rate


@students_bp.route('/list', methods=['GET'])
def list_students():
    page = request.args.get("page", 1, type=int)
    per_page = request.args.get("per_page", 50, type=int)
    search_term = request.args.get("search", type=str)

    query = Student.query.filter(Student.deleted == False).order_by(Student.furigana, Student.id)

    paginated = apply_pagination_and_search(
        query,
        Student,
        search_term,
        ["name", "furigana"],
        page,
        per_page
    )

    return jsonify({
        "students": [s.to_dict() for s in paginated.items],
        "total": paginated.total,
        "page": paginated.page,
        "pages": paginated.pages
    }), 200


@students_bp.route('/<int:student_id>', methods=['GET'])
def get_student(student_id):
    student = Student.query.filter_by(id=student_id, deleted=False).first()

    if not student:
        return jsonify({"error": "Student not found"}), 404

    return jsonify(student.to_dict()), 200


@students_bp.route("/create", methods=["POST"])
def create_student():
    data = request.get_json(silent=True) or {}

    name = (data.get("name") or "").strip()
    furigana = (data.get("furigana") or "").strip()

    if not name:
        return jsonify({"error": "Missing required fields"}), 400

    try:
        student = Student(
            name=name,
            furigana=furigana,
            daily_rate=_parse_daily_rate(data.get("daily_rate")),
            has_bike_rental=bool(data.get("has_bike_rental", False)),
            birth_date=_parse_birth_date(data.get("birth_date")),
            address=data.get("address") or None,
            emergency_contact=data.get("emergency_contact") or None,
            emergency_relationship=data.get("emergency_relationship") or None,
        )
    except ValueError as e:
        return jsonify({"error": "Invalid input", "details": str(e)}), 400

    db.session.add(student)
    db.session.commit()

    return jsonify({"message": "Student created successfully", "student": student.to_dict()}), 201


@students_bp.route('/update/<int:student_id>', methods=['PUT'])
def update_student(student_id):
    student = Student.query.filter_by(id=student_id, deleted=False).first_or_404()
    data = request.get_json(silent=True) or {}

    try:
        if 'name' in data:
            if not (data.get('name') or "").strip():
                return jsonify({"error": "Name cannot be empty"}), 400
            student.name = data.get('name').strip()
        if 'furigana' in data:
            student.furigana = (data.get('furigana') or "").strip()
        if 'daily_rate' in data:
            student.daily_rate = _parse_daily_rate(data.get('daily_rate'))
        if 'has_bike_rental' in data:
            student.has_bike_rental = bool(data.get('has_bike_rental'))
        if 'birth_date' in data:
            student.birth_date = _parse_birth_date(data.get('birth_date'))
        for field in ('address', 'emergency_contact', 'emergency_relationship'):
            if field in data:
                setattr(student, field, data.get(field) or None)
    except ValueError as e:
        db.session.rollback()
        return jsonify({"error": "Invalid input", "details": str(e)}), 400

    db.session.commit()
    return jsonify({"message": "Student updated successfully", "student": student.to_dict()}), 200


@students_bp.route("/remove/<int:student_id>", methods=["DELETE"])
def delete_student(student_id):
    student = Student.query.filter_by(id=student_id, deleted=False).first_or_404()

    student.soft_delete()
    db.session.commit()
    return jsonify({"message": "Student removed successfully"}), 200


@students_bp.route("/deleted", methods=["GET"])
def list_deleted_students():
    students = Student.query.filter(Student.deleted == True).order_by(Student.furigana).all()
    return jsonify([s.to_dict() for s in students]), 200


@students_bp.route("/restore/<int:student_id>", methods=["POST"])
def restore_student(student_id):
    student = db.get_or_404(Student, student_id)

    student.restore()
    db.session.commit()
    return jsonify({"message": "Student restored successfully"}), 200
