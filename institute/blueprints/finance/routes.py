from flask import request, jsonify
from flask_login import login_required
from ...models import StudentPayment, TeacherPayment
from ..auth.routes import role_required
from ..deletion_routes import register_deletion_routes
from . import bp

def _paginate(query, owner_column):
    owner = request.args.get("owner", type=int)
    page  = max(request.args.get("page", type=int) or 1, 1)
    per   = min(max(request.args.get("per_page", type=int) or 20, 1), 100)
    if owner:
        query = query.filter(owner_column == owner)
    total = query.count()
    items = query.offset((page-1)*per).limit(per).all()
    return dict(payments=[p.to_dict() for p in items], page=page, per_page=per,
                total=total, totalPages=(total + per - 1)//per)

@bp.get("/student-payments")
@login_required
@role_required("admin", "staff")
def student_payments():
    query = StudentPayment.active().order_by(StudentPayment.paid_on.desc(), StudentPayment.id.desc())
    return jsonify(_paginate(query, StudentPayment.student_id))

@bp.get("/teacher-payments")
@login_required
@role_required("admin", "staff")
def teacher_payments():
    query = TeacherPayment.active().order_by(TeacherPayment.paid_on.desc(), TeacherPayment.id.desc())
    return jsonify(_paginate(query, TeacherPayment.teacher_id))

register_deletion_routes(bp, "student-payments", prefix="/student-payments", inspect=False)
register_deletion_routes(bp, "teacher-payments", prefix="/teacher-payments", inspect=False)
