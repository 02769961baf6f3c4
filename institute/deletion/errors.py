"""Failures raised by the deletion workflow.

Every error maps onto one HTTP status and renders as a JSON body through
``DeletionError.to_dict``. Validation errors are raised before any write;
``PersistenceFailure`` wraps a storage error after the session was rolled
back and never exposes the underlying message to the caller.
"""


class DeletionError(Exception):
    status_code = 400

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class EntityNotFound(DeletionError):
    status_code = 404


class AlreadyInState(DeletionError):
    """Already deleted, or restoring a record that is not deleted."""


class InvalidRequest(DeletionError):
    pass


class BlockedByDependents(DeletionError):
    def __init__(self, entity_type, details, can_cascade=True):
        super().__init__(f"Cannot delete {entity_type}: {entity_type} has related records", details)
        self.entity_type = entity_type
        self.can_cascade = can_cascade

    def to_dict(self):
        hint = "Please remove all related records before deletion"
        if self.can_cascade:
            hint += " or use cascade=true to delete all related records"
        return {
            "error": self.message,
            "message": f"{self.message}. {hint}",
            "details": self.details,
            "canCascade": self.can_cascade,
        }


class Unauthenticated(DeletionError):
    status_code = 401


class Forbidden(DeletionError):
    status_code = 403


class PersistenceFailure(DeletionError):
    status_code = 500

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause
