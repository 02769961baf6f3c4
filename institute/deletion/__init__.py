from .audit import log_deletion_attempt
from .descriptors import DESCRIPTORS, EntityDescriptor, get_descriptor
from .errors import (
    AlreadyInState, BlockedByDependents, DeletionError, EntityNotFound, Forbidden,
    InvalidRequest, PersistenceFailure, Unauthenticated,
)
from .inspector import get_related_records, has_blocking_records
from .operations import (
    DeletionResult, cascade_delete, delete_entity, permanent_delete, reassign_and_delete,
    restore, soft_delete,
)
from .permissions import AuthContext, require_deletion_permission, validate_deletion_permission

__all__ = [
    "log_deletion_attempt", "DESCRIPTORS", "EntityDescriptor", "get_descriptor",
    "AlreadyInState", "BlockedByDependents", "DeletionError", "EntityNotFound", "Forbidden",
    "InvalidRequest", "PersistenceFailure", "Unauthenticated",
    "get_related_records", "has_blocking_records",
    "DeletionResult", "cascade_delete", "delete_entity", "permanent_delete",
    "reassign_and_delete", "restore", "soft_delete",
    "AuthContext", "require_deletion_permission", "validate_deletion_permission",
]
