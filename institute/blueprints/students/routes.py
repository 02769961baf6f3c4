from flask import request, jsonify
from flask_login import login_required
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from ...extensions import db
from ...models import Enrollment, Section, Student
from ..auth.routes import role_required
from ..deletion_routes import register_deletion_routes
from . import bp

@bp.get("")
@login_required
@role_required("admin", "staff")
def list_students():
    q     = (request.args.get("q") or "").strip()
    sort  = request.args.get("sort", "student_no")     # student_no|name|year
    order = request.args.get("order", "asc")           # asc|desc
    page  = max(request.args.get("page", type=int) or 1, 1)
    per   = min(max(request.args.get("per_page", type=int) or 10, 1), 100)

    query = Student.active()
    if q:
        like = f"%{q}%"
        query = query.filter(or_(
            Student.student_no.ilike(like),
            Student.first_name.ilike(like),
            Student.last_name.ilike(like),
            Student.email.ilike(like),
        ))

    sort_map = {
        "student_no": Student.student_no,
        "name":       Student.last_name,
        "year":       Student.grade_year,
    }
    col = sort_map.get(sort, Student.student_no)
    query = query.order_by(col.desc() if order == "desc" else col.asc())

    total = query.count()
    items = query.offset((page-1)*per).limit(per).all()
    pages = (total + per - 1)//per

    return jsonify(students=[s.to_dict() for s in items],
                   page=page, per_page=per, total=total, totalPages=pages)

@bp.post("")
@login_required
@role_required("admin")
def create_student():
    data = request.get_json(silent=True) or {}
    student_no = (data.get("student_no") or "").strip()
    first_name = (data.get("first_name") or "").strip()
    last_name  = (data.get("last_name") or "").strip()
    if not student_no or not first_name or not last_name:
        return jsonify(error="Student No., first name and last name are required"), 400

    section_ids = data.get("section_ids") or []
    for sid in section_ids:
        if db.session.get(Section, sid) is None:
            return jsonify(error=f"Section {sid} does not exist"), 400

    s = Student(student_no=student_no, first_name=first_name, last_name=last_name,
                email=data.get("email"), phone=data.get("phone"),
                grade_year=data.get("grade_year"))
    db.session.add(s)
    # sections picked at registration are enrolled automatically
    for sid in section_ids:
        db.session.add(Enrollment(student=s, section_id=sid, auto_generated=True))
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify(error="Student No. must be unique"), 400
    return jsonify(student=s.to_dict()), 201

@bp.get("/<int:sid>")
@login_required
@role_required("admin", "staff")
def get_student(sid):
    s = Student.active().filter_by(id=sid).one_or_none()
    if not s:
        return jsonify(error="Student not found"), 404
    return jsonify(student=s.to_dict())

@bp.post("/<int:sid>/enrollments")
@login_required
@role_required("admin")
def enroll_student(sid):
    s = Student.active().filter_by(id=sid).one_or_none()
    if not s:
        return jsonify(error="Student not found"), 404
    section_id = (request.get_json(silent=True) or {}).get("section_id")
    if not section_id or db.session.get(Section, section_id) is None:
        return jsonify(error="The class section does not exist"), 400
    en = Enrollment(student_id=s.id, section_id=section_id, auto_generated=False)
    db.session.add(en)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify(error="Student is already enrolled in this class section"), 400
    return jsonify(enrollment=en.to_dict()), 201

register_deletion_routes(bp, "students")
