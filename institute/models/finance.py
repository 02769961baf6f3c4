import enum
from datetime import date
from ..extensions import db
from .mixins import SoftDeleteMixin, isoformat


class PaymentDeleteReason(enum.Enum):
    DUPLICATE = "DUPLICATE"
    REFUNDED = "REFUNDED"
    ERROR = "ERROR"
    OTHER = "OTHER"


class StudentPayment(SoftDeleteMixin, db.Model):
    __tablename__ = "student_payment"
    delete_reasons = PaymentDeleteReason

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("student.id"), nullable=False, index=True)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    paid_on = db.Column(db.Date, nullable=False, default=date.today)
    reference = db.Column(db.String(64))

    student = db.relationship("Student", back_populates="payments")

    def to_dict(self):
        return {
            "id": self.id,
            "studentId": self.student_id,
            "amount": str(self.amount),
            "paidOn": isoformat(self.paid_on),
            "reference": self.reference,
        }


class TeacherPayment(SoftDeleteMixin, db.Model):
    __tablename__ = "teacher_payment"
    delete_reasons = PaymentDeleteReason

    id = db.Column(db.Integer, primary_key=True)
    teacher_id = db.Column(db.Integer, db.ForeignKey("teacher.id"), nullable=False, index=True)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    paid_on = db.Column(db.Date, nullable=False, default=date.today)
    reference = db.Column(db.String(64))

    teacher = db.relationship("Teacher", back_populates="payments")

    def to_dict(self):
        return {
            "id": self.id,
            "teacherId": self.teacher_id,
            "amount": str(self.amount),
            "paidOn": isoformat(self.paid_on),
            "reference": self.reference,
        }
