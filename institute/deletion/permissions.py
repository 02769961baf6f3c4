from dataclasses import dataclass
from typing import Optional

from .errors import Forbidden, Unauthenticated

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class AuthContext:
    """Who is calling. Built once per request and handed to the operations."""

    user_id: Optional[int] = None
    role: Optional[str] = None
    is_authenticated: bool = False

    @classmethod
    def from_user(cls, user):
        if user is None or not getattr(user, "is_authenticated", False):
            return cls()
        return cls(user_id=user.id, role=getattr(user, "role", None), is_authenticated=True)

    @property
    def is_admin(self):
        return self.is_authenticated and self.role == ADMIN_ROLE


@dataclass(frozen=True)
class PermissionCheck:
    valid: bool
    error: Optional[str] = None
    status_code: Optional[int] = None


def validate_deletion_permission(auth, entity_type, verb="delete"):
    if auth is None or not auth.is_authenticated:
        return PermissionCheck(False, "Authentication required", 401)
    if not auth.is_admin:
        return PermissionCheck(False, f"Unauthorized: Only Admin users can {verb} {entity_type}s.", 403)
    return PermissionCheck(True)


def require_deletion_permission(auth, entity_type, verb="delete"):
    check = validate_deletion_permission(auth, entity_type, verb)
    if check.valid:
        return
    if check.status_code == 401:
        raise Unauthenticated(check.error)
    raise Forbidden(check.error)
