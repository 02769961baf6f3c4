from types import SimpleNamespace

import pytest

from institute.deletion import (
    AuthContext, Forbidden, Unauthenticated, require_deletion_permission,
    validate_deletion_permission,
)


def test_anonymous_user_needs_authentication():
    check = validate_deletion_permission(AuthContext(), "student")
    assert not check.valid
    assert check.status_code == 401
    assert check.error == "Authentication required"


def test_non_admin_is_refused_with_role_named():
    auth = AuthContext(user_id=4, role="staff", is_authenticated=True)
    check = validate_deletion_permission(auth, "teacher")
    assert not check.valid
    assert check.status_code == 403
    assert check.error == "Unauthorized: Only Admin users can delete teachers."


def test_admin_is_allowed():
    auth = AuthContext(user_id=1, role="admin", is_authenticated=True)
    assert validate_deletion_permission(auth, "student").valid
    require_deletion_permission(auth, "student")


def test_require_raises_matching_errors():
    with pytest.raises(Unauthenticated):
        require_deletion_permission(None, "student")
    with pytest.raises(Forbidden) as exc:
        require_deletion_permission(AuthContext(2, "teacher", True), "student", "restore")
    assert "can restore students" in exc.value.message


def test_auth_context_from_flask_login_users():
    anonymous = SimpleNamespace(is_authenticated=False)
    assert AuthContext.from_user(anonymous) == AuthContext()
    user = SimpleNamespace(is_authenticated=True, id=9, role="admin")
    assert AuthContext.from_user(user) == AuthContext(9, "admin", True)
    assert AuthContext.from_user(user).is_admin
