import itertools
from datetime import date
from decimal import Decimal

import pytest
from flask import has_app_context

from config import TestConfig
from institute import create_app
from institute.extensions import db
from institute.models import (
    Attendance, Course, Enrollment, Section, Student, StudentPayment, Teacher, TeacherPayment,
    User,
)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """Push an application context for tests that call the service layer directly."""
    with app.app_context():
        yield
        db.session.remove()


class Factory:
    """Creates rows and returns their ids, so tests never hold detached instances."""

    def __init__(self, app):
        self.app = app
        self._seq = itertools.count(1)

    def _save(self, obj, archived_by=None, reason=None):
        if reason is not None:
            for name, value in obj.archive_values(archived_by, reason).items():
                setattr(obj, name, value)
        if has_app_context():
            db.session.add(obj)
            db.session.commit()
            return obj.id
        with self.app.app_context():
            db.session.add(obj)
            db.session.commit()
            return obj.id

    def user(self, username=None, role="staff", password="secret"):
        u = User(username=username or f"user{next(self._seq)}", role=role)
        u.set_password(password)
        return self._save(u)

    def student(self, reason=None, archived_by=None, **kw):
        n = next(self._seq)
        fields = dict(student_no=f"S{n:04d}", first_name="Stu", last_name=f"Dent{n}")
        fields.update(kw)
        return self._save(Student(**fields), archived_by, reason)

    def teacher(self, reason=None, archived_by=None, **kw):
        n = next(self._seq)
        fields = dict(teacher_no=f"T{n:04d}", first_name="Tea", last_name=f"Cher{n}")
        fields.update(kw)
        return self._save(Teacher(**fields), archived_by, reason)

    def section(self, teacher_id, term="2025S"):
        n = next(self._seq)
        course_id = self._save(Course(code=f"C{n:03d}", name=f"Course {n}"))
        return self._save(Section(course_id=course_id, teacher_id=teacher_id, term=term))

    def enrollment(self, student_id, section_id, auto_generated=False):
        return self._save(Enrollment(student_id=student_id, section_id=section_id,
                                     auto_generated=auto_generated))

    def attendance(self, student_id, section_id, day=None):
        return self._save(Attendance(student_id=student_id, section_id=section_id,
                                     date=day or date(2025, 3, next(self._seq) % 28 + 1)))

    def student_payment(self, student_id, amount="150.00", reason=None):
        return self._save(StudentPayment(student_id=student_id, amount=Decimal(amount),
                                         reference=f"RCPT-{next(self._seq)}"), None, reason)

    def teacher_payment(self, teacher_id, amount="900.00", reason=None):
        return self._save(TeacherPayment(teacher_id=teacher_id, amount=Decimal(amount),
                                         reference=f"SAL-{next(self._seq)}"), None, reason)


@pytest.fixture
def factory(app):
    return Factory(app)


def _login(app, factory, role):
    username = f"{role}-{next(factory._seq)}"
    factory.user(username=username, role=role, password="secret")
    client = app.test_client()
    resp = client.post("/auth/login", json={"username": username, "password": "secret"})
    assert resp.status_code == 200
    return client


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app, factory):
    return _login(app, factory, "admin")


@pytest.fixture
def staff_client(app, factory):
    return _login(app, factory, "staff")


@pytest.fixture
def scenario_student(factory):
    """A student with 3 attendances, 2 manual enrollments and no payments."""
    teacher_id = factory.teacher()
    sections = [factory.section(teacher_id), factory.section(teacher_id)]
    student_id = factory.student()
    for section_id in sections:
        factory.enrollment(student_id, section_id)
    for day in (3, 4, 5):
        factory.attendance(student_id, sections[0], day=date(2025, 3, day))
    return student_id


@pytest.fixture
def count_rows(app):
    def count(model, **filters):
        with app.app_context():
            return model.query.filter_by(**filters).count()
    return count
