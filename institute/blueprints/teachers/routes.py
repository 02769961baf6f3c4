from flask import request, jsonify
from flask_login import login_required
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from ...extensions import db
from ...models import Section, Teacher
from ..auth.routes import role_required
from ..deletion_routes import register_deletion_routes
from . import bp

@bp.get("")
@login_required
@role_required("admin", "staff")
def list_teachers():
    q     = (request.args.get("q") or "").strip()      # teacher_no/name/department
    sort  = request.args.get("sort", "teacher_no")     # teacher_no|name|dept
    order = request.args.get("order", "asc")
    page  = max(request.args.get("page", type=int) or 1, 1)
    per   = min(max(request.args.get("per_page", type=int) or 10, 1), 100)

    query = Teacher.active()
    if q:
        like = f"%{q}%"
        query = query.filter(or_(
            Teacher.teacher_no.ilike(like),
            Teacher.first_name.ilike(like),
            Teacher.last_name.ilike(like),
            Teacher.dept.ilike(like),
        ))

    sort_map = {
        "teacher_no": Teacher.teacher_no,
        "name":       Teacher.last_name,
        "dept":       Teacher.dept,
    }
    col = sort_map.get(sort, Teacher.teacher_no)
    query = query.order_by(col.desc() if order == "desc" else col.asc())

    total = query.count()
    items = query.offset((page-1)*per).limit(per).all()
    pages = (total + per - 1)//per

    return jsonify(teachers=[t.to_dict() for t in items],
                   page=page, per_page=per, total=total, totalPages=pages)

@bp.post("")
@login_required
@role_required("admin")
def create_teacher():
    data = request.get_json(silent=True) or {}
    teacher_no = (data.get("teacher_no") or "").strip()
    first_name = (data.get("first_name") or "").strip()
    last_name  = (data.get("last_name") or "").strip()
    if not teacher_no or not first_name or not last_name:
        return jsonify(error="Teacher No., first name and last name are required"), 400
    t = Teacher(teacher_no=teacher_no, first_name=first_name, last_name=last_name,
                email=data.get("email"), phone=data.get("phone"), dept=data.get("dept"))
    db.session.add(t)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify(error="Teacher No. must be unique"), 400
    return jsonify(teacher=t.to_dict()), 201

@bp.get("/<int:tid>")
@login_required
@role_required("admin", "staff")
def get_teacher(tid):
    t = Teacher.active().filter_by(id=tid).one_or_none()
    if not t:
        return jsonify(error="Teacher not found"), 404
    return jsonify(teacher=t.to_dict())

@bp.get("/<int:tid>/sections")
@login_required
@role_required("admin", "staff")
def teacher_sections(tid):
    t = db.get_or_404(Teacher, tid, description="Teacher not found")
    secs = Section.query.filter_by(teacher_id=t.id).order_by(Section.term.desc()).all()
    return jsonify(sections=[s.to_dict() for s in secs])

register_deletion_routes(bp, "teachers")
