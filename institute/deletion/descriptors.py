"""Describes each archivable table to the deletion workflow.

One descriptor per entity type carries everything the generic operations
need: the model, the accepted delete reasons, and the dependent tables in
the order they must be cleared before the owner row can go.
"""
from dataclasses import dataclass
from typing import Callable, Tuple

from ..extensions import db
from ..models import (
    Attendance, Enrollment, Section, Student, StudentPayment, Teacher, TeacherPayment,
)
from .errors import EntityNotFound, InvalidRequest


@dataclass(frozen=True)
class Dependent:
    """Rows that reference an owner entity.

    ``blocking`` dependents are reported by the inspector and prevent a
    plain archive. ``derived`` dependents are system-generated and are
    removed when the owner is archived. Dependents that are neither are
    only touched by a cascade.
    """

    key: str
    model: type
    criteria: Callable
    blocking: bool = True
    derived: bool = False

    def count(self, entity_id):
        stmt = db.select(db.func.count()).select_from(self.model).where(*self.criteria(entity_id))
        return db.session.scalar(stmt)

    def delete(self, entity_id):
        stmt = (db.delete(self.model)
                .where(*self.criteria(entity_id))
                .execution_options(synchronize_session=False))
        return db.session.execute(stmt).rowcount


@dataclass(frozen=True)
class Reassignment:
    key: str
    model: type
    attribute: str

    def rewrite(self, old_id, new_id):
        column = getattr(self.model, self.attribute)
        stmt = (db.update(self.model)
                .where(column == old_id)
                .values({self.attribute: new_id})
                .execution_options(synchronize_session=False))
        return db.session.execute(stmt).rowcount


@dataclass(frozen=True)
class EntityDescriptor:
    name: str
    plural: str
    model: type
    collection_key: str
    dependents: Tuple[Dependent, ...] = ()
    reassignments: Tuple[Reassignment, ...] = ()
    archive_fields: Tuple[str, ...] = ()

    @property
    def title(self):
        return self.name[:1].upper() + self.name[1:]

    @property
    def reasons(self):
        return self.model.delete_reasons

    @property
    def blocking(self):
        return tuple(d for d in self.dependents if d.blocking)

    @property
    def derived(self):
        return tuple(d for d in self.dependents if d.derived)

    def parse_reason(self, value):
        if value is None or value == "":
            return self.reasons.OTHER
        if isinstance(value, self.reasons):
            return value
        try:
            return self.reasons[str(value).strip().upper()]
        except KeyError:
            allowed = ", ".join(r.name for r in self.reasons)
            raise InvalidRequest(
                f"Invalid delete reason '{value}'. Expected one of: {allowed}"
            ) from None

    def label(self, entity):
        full_name = getattr(entity, "full_name", None)
        if full_name:
            return full_name
        return f"{self.title} #{entity.id}"


def _teacher_sections(teacher_id):
    return db.select(Section.id).where(Section.teacher_id == teacher_id)


STUDENTS = EntityDescriptor(
    name="student",
    plural="students",
    model=Student,
    collection_key="students",
    dependents=(
        Dependent("attendances", Attendance, lambda sid: [Attendance.student_id == sid]),
        Dependent("autoEnrollments", Enrollment,
                  lambda sid: [Enrollment.student_id == sid, Enrollment.auto_generated.is_(True)],
                  blocking=False, derived=True),
        Dependent("enrollments", Enrollment,
                  lambda sid: [Enrollment.student_id == sid, Enrollment.auto_generated.is_(False)]),
        Dependent("payments", StudentPayment, lambda sid: [StudentPayment.student_id == sid]),
    ),
    archive_fields=("student_no", "first_name", "last_name", "email"),
)

TEACHERS = EntityDescriptor(
    name="teacher",
    plural="teachers",
    model=Teacher,
    collection_key="teachers",
    dependents=(
        Dependent("sectionAttendances", Attendance,
                  lambda tid: [Attendance.section_id.in_(_teacher_sections(tid))],
                  blocking=False),
        Dependent("sectionEnrollments", Enrollment,
                  lambda tid: [Enrollment.section_id.in_(_teacher_sections(tid))],
                  blocking=False),
        Dependent("classSections", Section, lambda tid: [Section.teacher_id == tid]),
        Dependent("payments", TeacherPayment, lambda tid: [TeacherPayment.teacher_id == tid]),
    ),
    reassignments=(Reassignment("classSections", Section, "teacher_id"),),
    archive_fields=("teacher_no", "first_name", "last_name", "email", "dept"),
)

STUDENT_PAYMENTS = EntityDescriptor(
    name="student payment",
    plural="student-payments",
    model=StudentPayment,
    collection_key="payments",
    archive_fields=("student_id", "amount", "paid_on", "reference"),
)

TEACHER_PAYMENTS = EntityDescriptor(
    name="teacher payment",
    plural="teacher-payments",
    model=TeacherPayment,
    collection_key="payments",
    archive_fields=("teacher_id", "amount", "paid_on", "reference"),
)

DESCRIPTORS = {d.plural: d for d in (STUDENTS, TEACHERS, STUDENT_PAYMENTS, TEACHER_PAYMENTS)}


def get_descriptor(plural):
    try:
        return DESCRIPTORS[plural]
    except KeyError:
        raise EntityNotFound(f"Unknown entity type '{plural}'") from None
