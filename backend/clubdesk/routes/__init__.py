from flask import jsonify
from clubdesk.errors import ClubdeskError
from .base_route import base_bp
from .attendance import attendance_bp
from .tuition import tuition_bp
from .students import students_bp
from .instructors import instructors_bp
from .settings import settings_bp
from .accounting import accounting_bp
from .events import events_bp


def handle_clubdesk_error(error):
    return jsonify(error.to_dict()), error.status_code


def register_routes(app):
    app.register_blueprint(base_bp)
    app.register_blueprint(attendance_bp, url_prefix='/attendance')
    app.register_blueprint(tuition_bp, url_prefix='/tuition')
    app.register_blueprint(students_bp, url_prefix='/students')
    app.register_blueprint(instructors_bp, url_prefix='/instructors')
    app.register_blueprint(settings_bp, url_prefix='/settings')
    app.register_blueprint(accounting_bp, url_prefix='/accounting')
    app.register_blueprint(events_bp, url_prefix='/events')

    # service-layer refusals and store failures
    app.register_error_handler(ClubdeskError, handle_clubdesk_error)
