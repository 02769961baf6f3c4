from ..extensions import db

class Course(db.Model):
    __tablename__ = "course"
    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(32), unique=True, nullable=False)
    name = db.Column(db.String(128), nullable=False)
    credits = db.Column(db.Integer, nullable=False, default=2)

    sections = db.relationship("Section", back_populates="course")

class Section(db.Model):
    """A class section: one course taught by one teacher in one term."""
    __tablename__ = "section"
    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey("course.id"), nullable=False)
    teacher_id = db.Column(db.Integer, db.ForeignKey("teacher.id"), nullable=False, index=True)
    term = db.Column(db.String(16), nullable=False)  # e.g. "2025S"
    capacity = db.Column(db.Integer, default=60)

    course = db.relationship("Course", back_populates="sections")
    teacher = db.relationship("Teacher", back_populates="sections")
    enrollments = db.relationship("Enrollment", back_populates="section", passive_deletes=True)
    attendances = db.relationship("Attendance", back_populates="section", passive_deletes=True)

    def to_dict(self):
        return {
            "id": self.id,
            "courseId": self.course_id,
            "teacherId": self.teacher_id,
            "term": self.term,
            "capacity": self.capacity,
        }
