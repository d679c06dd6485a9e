from clubdesk.extensions import db

class AttendanceRecord(db.Model):
    __tablename__ = 'attendance'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id'), nullable=True, index=True)
    instructor_id = db.Column(db.Integer, db.ForeignKey('instructors.id'), nullable=True, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False)  # 'present', 'absent', 'late'
    location = db.Column(db.String(255), nullable=True)

    student = db.relationship('Student', back_populates='attendance_records')
    instructor = db.relationship('Instructor', back_populates='attendance_records')

    __table_args__ = (
        db.CheckConstraint(
            '(student_id IS NULL) != (instructor_id IS NULL)',
            name='ck_attendance_single_subject'
        ),
        db.UniqueConstraint('student_id', 'date', name='uq_attendance_student_date'),
        db.UniqueConstraint('instructor_id', 'date', name='uq_attendance_instructor_date'),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "student_id": self.student_id,
            "instructor_id": self.instructor_id,
            "date": self.date.isoformat(),
            "status": self.status,
            "location": self.location,
        }
