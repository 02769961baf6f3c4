from datetime import date
from ..extensions import db

class Enrollment(db.Model):
    __tablename__ = "enrollment"
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("student.id"), nullable=False, index=True)
    section_id = db.Column(db.Integer, db.ForeignKey("section.id"), nullable=False, index=True)
    status = db.Column(db.String(16), nullable=False, default="enrolled")
    # created by the system when the student was registered, not by an admin
    auto_generated = db.Column(db.Boolean, nullable=False, default=False)
    __table_args__ = (
        db.UniqueConstraint("student_id", "section_id", name="uq_student_section"),
    )

    student = db.relationship("Student", back_populates="enrollments")
    section = db.relationship("Section", back_populates="enrollments")

    def to_dict(self):
        return {
            "id": self.id,
            "studentId": self.student_id,
            "sectionId": self.section_id,
            "status": self.status,
            "autoGenerated": self.auto_generated,
        }

class Attendance(db.Model):
    __tablename__ = "attendance"
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("student.id"), nullable=False, index=True)
    section_id = db.Column(db.Integer, db.ForeignKey("section.id"), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, default=date.today)
    status = db.Column(db.String(16), nullable=False, default="present")  # present/absent/late

    student = db.relationship("Student", back_populates="attendances")
    section = db.relationship("Section", back_populates="attendances")
