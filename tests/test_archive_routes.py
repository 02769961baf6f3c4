from institute.models import (
    PaymentDeleteReason, Student, StudentDeleteReason, StudentPayment, TeacherDeleteReason,
    TeacherPayment,
)


def test_archive_lists_newest_first(admin_client, factory):
    factory.student()
    first = factory.student(reason=StudentDeleteReason.GRADUATED, archived_by=1)
    second = factory.student(reason=StudentDeleteReason.ERROR, archived_by=1)
    body = admin_client.get("/api/archive/students").get_json()
    assert [s["id"] for s in body["students"]] == [second, first]
    assert body["total"] == 2
    assert body["page"] == 1
    assert body["totalPages"] == 1
    row = body["students"][0]
    assert row["isDeleted"] is True
    assert row["deleteReason"] == "ERROR"
    assert row["deletedBy"] == 1
    assert row["deletedAt"]
    assert "studentNo" in row


def test_archive_pagination(admin_client, factory):
    for _ in range(5):
        factory.teacher(reason=TeacherDeleteReason.RESIGNED, archived_by=1)
    body = admin_client.get("/api/archive/teachers?page=3&limit=2").get_json()
    assert len(body["teachers"]) == 1
    assert body["total"] == 5
    assert body["limit"] == 2
    assert body["totalPages"] == 3


def test_archive_limit_is_clamped(admin_client, app):
    body = admin_client.get("/api/archive/students?limit=5000").get_json()
    assert body["limit"] == app.config["ARCHIVE_MAX_PAGE_SIZE"]
    assert body["students"] == []
    assert body["totalPages"] == 0


def test_archive_requires_admin(staff_client, client):
    resp = staff_client.get("/api/archive/students")
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "Unauthorized: Only Admin users can view archived students."
    assert client.get("/api/archive/students").status_code == 401


def test_unknown_archive_kind_is_404(admin_client):
    resp = admin_client.get("/api/archive/courses")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Unknown entity type 'courses'"


def test_purge_archived_student(admin_client, factory, count_rows):
    sid = factory.student(reason=StudentDeleteReason.GRADUATED, archived_by=1)
    resp = admin_client.delete(f"/api/archive/students/{sid}")
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Student permanently deleted"
    assert count_rows(Student, id=sid) == 0


def test_purge_active_student_is_rejected(admin_client, factory, count_rows):
    sid = factory.student()
    resp = admin_client.delete(f"/api/archive/students/{sid}")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Cannot permanently delete active student. Soft delete first."
    assert count_rows(Student, id=sid) == 1


def test_purge_blocked_by_payments(admin_client, factory, count_rows):
    sid = factory.student(reason=StudentDeleteReason.TRANSFERRED, archived_by=1)
    factory.student_payment(sid)
    resp = admin_client.delete(f"/api/archive/students/{sid}")
    assert resp.status_code == 400
    assert resp.get_json()["details"]["payments"] == 1
    assert count_rows(Student, id=sid) == 1


def test_purge_requires_admin(staff_client, factory):
    sid = factory.student(reason=StudentDeleteReason.ERROR, archived_by=1)
    resp = staff_client.delete(f"/api/archive/students/{sid}")
    assert resp.status_code == 403
    assert "permanently delete students" in resp.get_json()["error"]


def test_payment_archive_and_restore(admin_client, factory, count_rows):
    sid = factory.student()
    pid = factory.student_payment(sid)

    resp = admin_client.delete(f"/api/finance/student-payments/{pid}?deleteReason=DUPLICATE")
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Student payment archived successfully"
    listed = admin_client.get("/api/finance/student-payments").get_json()
    assert listed["payments"] == []

    archived = admin_client.get("/api/archive/student-payments").get_json()
    assert [p["id"] for p in archived["payments"]] == [pid]
    assert archived["payments"][0]["amount"] == "150.00"

    resp = admin_client.post(f"/api/finance/student-payments/{pid}/restore")
    assert resp.status_code == 200
    assert count_rows(StudentPayment, id=pid, is_deleted=False) == 1


def test_teacher_payment_listing_filters_by_owner(staff_client, factory):
    t1, t2 = factory.teacher(), factory.teacher()
    factory.teacher_payment(t1)
    factory.teacher_payment(t2)
    factory.teacher_payment(t2, reason=PaymentDeleteReason.ERROR)
    body = staff_client.get(f"/api/finance/teacher-payments?owner={t2}").get_json()
    assert body["total"] == 1
    assert body["payments"][0]["teacherId"] == t2


def test_payment_delete_requires_admin(staff_client, factory, count_rows):
    pid = factory.teacher_payment(factory.teacher())
    resp = staff_client.delete(f"/api/finance/teacher-payments/{pid}")
    assert resp.status_code == 403
    assert count_rows(TeacherPayment, id=pid, is_deleted=False) == 1
