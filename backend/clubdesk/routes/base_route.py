from datetime import date
from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from clubdesk.extensions import db

base_bp = Blueprint("base", __name__)


@base_bp.route("/")
def home():
    return jsonify({"message": "clubdesk API", "month": date.today().strftime("%Y-%m")})


@base_bp.route("/api/test-db")
def test_db():
    """Store check: connectivity, roster size and whether this month is locked."""
    from clubdesk.models import Student, Instructor
    from clubdesk.services.finalization import get_status

    try:
        db.session.execute(text("SELECT 1"))
        body = {
            "status": "success",
            "engine": db.engine.dialect.name,
            "students": Student.query.filter(Student.deleted == False).count(),
            "instructors": Instructor.query.filter(Instructor.deleted == False).count(),
            "current_month": get_status(date.today().strftime("%Y-%m")),
        }
    except SQLAlchemyError as e:
        db.session.rollback()
        return jsonify({"status": "error", "message": str(e)}), 500
    return jsonify(body), 200
