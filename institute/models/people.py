import enum
from ..extensions import db
from .mixins import SoftDeleteMixin, utcnow, isoformat


class StudentDeleteReason(enum.Enum):
    GRADUATED = "GRADUATED"
    TRANSFERRED = "TRANSFERRED"
    ERROR = "ERROR"
    OTHER = "OTHER"


class TeacherDeleteReason(enum.Enum):
    RESIGNED = "RESIGNED"
    TERMINATED = "TERMINATED"
    REASSIGNED = "REASSIGNED"
    ERROR = "ERROR"
    OTHER = "OTHER"


class Student(SoftDeleteMixin, db.Model):
    __tablename__ = "student"
    delete_reasons = StudentDeleteReason

    id = db.Column(db.Integer, primary_key=True)
    student_no = db.Column(db.String(32), unique=True, nullable=False)
    first_name = db.Column(db.String(64), nullable=False)
    last_name = db.Column(db.String(64), nullable=False)
    email = db.Column(db.String(128))
    phone = db.Column(db.String(32))
    grade_year = db.Column(db.Integer)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    enrollments = db.relationship("Enrollment", back_populates="student", passive_deletes=True)
    attendances = db.relationship("Attendance", back_populates="student", passive_deletes=True)
    payments = db.relationship("StudentPayment", back_populates="student", passive_deletes=True)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def to_dict(self):
        return {
            "id": self.id,
            "studentNo": self.student_no,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "gradeYear": self.grade_year,
            "createdAt": isoformat(self.created_at),
        }


class Teacher(SoftDeleteMixin, db.Model):
    __tablename__ = "teacher"
    delete_reasons = TeacherDeleteReason

    id = db.Column(db.Integer, primary_key=True)
    teacher_no = db.Column(db.String(32), unique=True, nullable=False)
    first_name = db.Column(db.String(64), nullable=False)
    last_name = db.Column(db.String(64), nullable=False)
    email = db.Column(db.String(128))
    phone = db.Column(db.String(32))
    dept = db.Column(db.String(64))
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    sections = db.relationship("Section", back_populates="teacher", passive_deletes=True)
    payments = db.relationship("TeacherPayment", back_populates="teacher", passive_deletes=True)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def to_dict(self):
        return {
            "id": self.id,
            "teacherNo": self.teacher_no,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "dept": self.dept,
            "createdAt": isoformat(self.created_at),
        }
