from ..extensions import db
from .people import Student, Teacher, StudentDeleteReason, TeacherDeleteReason
from .course import Course, Section
from .enrollment import Enrollment, Attendance
from .finance import StudentPayment, TeacherPayment, PaymentDeleteReason
from .user import User

__all__ = [
    "Student", "Teacher", "StudentDeleteReason", "TeacherDeleteReason",
    "Course", "Section", "Enrollment", "Attendance",
    "StudentPayment", "TeacherPayment", "PaymentDeleteReason", "User",
]
