"""Archive, restore, purge and cascade operations over archivable tables.

Public functions audit every call (attempt, then success or error) and
own their transaction: they commit on success and roll back on any
failure. Preconditions are enforced twice, once on the loaded row to pick
the right error and once in the ``WHERE`` clause of the write so that a
concurrent request cannot slip between the check and the update.
"""
from contextlib import contextmanager
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from .audit import log_deletion_attempt
from .errors import (
    AlreadyInState, BlockedByDependents, DeletionError, EntityNotFound, InvalidRequest,
    PersistenceFailure,
)
from .inspector import get_related_records, has_blocking_records
from .permissions import require_deletion_permission


@dataclass
class DeletionResult:
    message: str
    removed: dict = field(default_factory=dict)
    reassigned: dict = field(default_factory=dict)

    def to_dict(self):
        body = {"message": self.message}
        if self.removed:
            body["removed"] = self.removed
        if self.reassigned:
            body["reassigned"] = self.reassigned
        return body


_FAILURE_VERBS = {
    "delete": "delete",
    "soft_delete": "delete",
    "restore": "restore",
    "permanent_delete": "permanently delete",
    "cascade_delete": "delete",
    "reassign": "reassign",
}


@contextmanager
def _audited(descriptor, entity_id, operation, actor, **metadata):
    log_deletion_attempt(descriptor.name, entity_id, "attempt",
                         operation=operation, actor=actor, **metadata)
    try:
        yield
    except DeletionError as exc:
        db.session.rollback()
        log_deletion_attempt(descriptor.name, entity_id, "error",
                             operation=operation, actor=actor,
                             reason=exc.message, details=exc.details)
        raise
    except SQLAlchemyError as exc:
        db.session.rollback()
        log_deletion_attempt(descriptor.name, entity_id, "error", exc_info=exc,
                             operation=operation, actor=actor, error=str(exc))
        verb = _FAILURE_VERBS.get(operation, operation)
        raise PersistenceFailure(f"Failed to {verb} {descriptor.name}", cause=exc) from exc
    except Exception as exc:
        # driver errors outside the SQLAlchemy hierarchy, e.g. an id the backend cannot bind
        db.session.rollback()
        log_deletion_attempt(descriptor.name, entity_id, "error", exc_info=exc,
                             operation=operation, actor=actor, error=repr(exc))
        verb = _FAILURE_VERBS.get(operation, operation)
        raise PersistenceFailure(f"Failed to {verb} {descriptor.name}", cause=exc) from exc
    log_deletion_attempt(descriptor.name, entity_id, "success",
                         operation=operation, actor=actor, **metadata)


def _get_entity(descriptor, entity_id):
    entity = db.session.get(descriptor.model, entity_id)
    if entity is None:
        raise EntityNotFound(f"{descriptor.title} not found")
    return entity


def _soft_delete(descriptor, entity, deleted_by, delete_reason):
    if entity.is_deleted:
        raise AlreadyInState(f"{descriptor.title} is already deleted")
    reason = descriptor.parse_reason(delete_reason)
    model = descriptor.model
    stmt = (db.update(model)
            .where(model.id == entity.id, model.is_deleted.is_(False))
            .values(**model.archive_values(deleted_by, reason))
            .execution_options(synchronize_session=False))
    if db.session.execute(stmt).rowcount == 0:
        raise AlreadyInState(f"{descriptor.title} is already deleted")

    removed = {}
    for dep in descriptor.derived:
        removed[dep.key] = dep.delete(entity.id)
    db.session.commit()
    return DeletionResult(f"{descriptor.title} archived successfully", removed={
        k: v for k, v in removed.items() if v
    })


def _restore(descriptor, entity):
    if not entity.is_deleted:
        raise AlreadyInState(f"{descriptor.title} is not deleted")
    model = descriptor.model
    stmt = (db.update(model)
            .where(model.id == entity.id, model.is_deleted.is_(True))
            .values(**model.restore_values())
            .execution_options(synchronize_session=False))
    if db.session.execute(stmt).rowcount == 0:
        raise AlreadyInState(f"{descriptor.title} is not deleted")
    db.session.commit()
    return DeletionResult(f"{descriptor.title} restored successfully")


def _delete_row(descriptor, entity_id, *criteria):
    model = descriptor.model
    stmt = (db.delete(model)
            .where(model.id == entity_id, *criteria)
            .execution_options(synchronize_session=False))
    return db.session.execute(stmt).rowcount


def _permanent_delete(descriptor, entity):
    if not entity.is_deleted:
        raise AlreadyInState(
            f"Cannot permanently delete active {descriptor.name}. Soft delete first."
        )
    counts = get_related_records(descriptor, entity.id)
    if has_blocking_records(counts):
        raise BlockedByDependents(descriptor.name, counts)
    if _delete_row(descriptor, entity.id, descriptor.model.is_deleted.is_(True)) == 0:
        raise AlreadyInState(
            f"Cannot permanently delete active {descriptor.name}. Soft delete first."
        )
    db.session.expunge(entity)
    db.session.commit()
    return DeletionResult(f"{descriptor.title} permanently deleted")


def _cascade_delete(descriptor, entity, actor):
    removed = {dep.key: 0 for dep in descriptor.dependents}
    for dep in descriptor.dependents:
        if dep.count(entity.id) == 0:
            continue
        removed[dep.key] = dep.delete(entity.id)
        log_deletion_attempt(descriptor.name, entity.id, "attempt",
                             operation="cascade_step", actor=actor,
                             step=dep.key, removed=removed[dep.key])
    _delete_row(descriptor, entity.id)
    db.session.expunge(entity)
    db.session.commit()
    return DeletionResult(
        f"{descriptor.title} and all related records deleted successfully", removed=removed
    )


def _reassign_and_delete(descriptor, entity, deleted_by, reassign_to, delete_reason):
    if not descriptor.reassignments:
        raise InvalidRequest(f"Records of a {descriptor.name} cannot be reassigned")
    if reassign_to == entity.id:
        raise InvalidRequest(f"Cannot reassign records to the same {descriptor.name}")
    if not delete_reason:
        raise InvalidRequest("A reason is required when reassigning records")
    if entity.is_deleted:
        raise AlreadyInState(f"{descriptor.title} is already deleted")

    replacement = db.session.get(descriptor.model, reassign_to)
    if replacement is None:
        raise EntityNotFound(f"Replacement {descriptor.name} not found")
    if replacement.is_deleted:
        raise InvalidRequest(f"Replacement {descriptor.name} is archived")

    reassigned = {r.key: r.rewrite(entity.id, replacement.id) for r in descriptor.reassignments}
    counts = get_related_records(descriptor, entity.id)
    if has_blocking_records(counts):
        raise BlockedByDependents(descriptor.name, counts)

    result = _soft_delete(descriptor, entity, deleted_by, delete_reason)
    result.message = (
        f"{descriptor.title} archived and records reassigned to "
        f"{descriptor.label(replacement)}"
    )
    result.reassigned = reassigned
    return result


def soft_delete(descriptor, entity_id, *, deleted_by, delete_reason=None):
    """Archive one row. Checking for dependents is left to the caller."""
    with _audited(descriptor, entity_id, "soft_delete", deleted_by, deleteReason=delete_reason):
        result = _soft_delete(descriptor, _get_entity(descriptor, entity_id),
                              deleted_by, delete_reason)
    return result


def restore(descriptor, entity_id, *, restored_by=None):
    with _audited(descriptor, entity_id, "restore", restored_by):
        result = _restore(descriptor, _get_entity(descriptor, entity_id))
    return result


def permanent_delete(descriptor, entity_id, *, actor=None):
    with _audited(descriptor, entity_id, "permanent_delete", actor):
        result = _permanent_delete(descriptor, _get_entity(descriptor, entity_id))
    return result


def cascade_delete(descriptor, entity_id, *, actor=None):
    """Remove every dependent row, then the entity itself, in one transaction."""
    with _audited(descriptor, entity_id, "cascade_delete", actor):
        result = _cascade_delete(descriptor, _get_entity(descriptor, entity_id), actor)
    return result


def reassign_and_delete(descriptor, entity_id, reassign_to, *, deleted_by, delete_reason):
    with _audited(descriptor, entity_id, "reassign", deleted_by,
                  reassignTo=reassign_to, deleteReason=delete_reason):
        result = _reassign_and_delete(descriptor, _get_entity(descriptor, entity_id),
                                      deleted_by, reassign_to, delete_reason)
    return result


def delete_entity(descriptor, entity_id, auth, *, cascade=False, delete_reason=None,
                  reassign_to=None):
    """Entry point behind ``DELETE /api/<kind>/<id>``.

    Archives by default. Related records block the archive unless the
    caller asks for a cascade (hard delete of the whole tree) or, where
    the entity supports it, a reassignment to another owner.
    Derived rows are removed before blockers are counted and stay removed
    even when the archive is refused.
    """
    with _audited(descriptor, entity_id, "delete", auth.user_id, cascade=cascade,
                  deleteReason=delete_reason, reassignTo=reassign_to):
        require_deletion_permission(auth, descriptor.name)
        entity = _get_entity(descriptor, entity_id)
        if reassign_to is not None:
            result = _reassign_and_delete(descriptor, entity, auth.user_id,
                                          reassign_to, delete_reason)
        elif cascade:
            result = _cascade_delete(descriptor, entity, auth.user_id)
        else:
            # derived rows are cleared and committed before blockers are counted
            removed = {dep.key: dep.delete(entity.id) for dep in descriptor.derived}
            db.session.commit()
            counts = get_related_records(descriptor, entity.id)
            if has_blocking_records(counts):
                raise BlockedByDependents(descriptor.name, counts)
            result = _soft_delete(descriptor, entity, auth.user_id, delete_reason)
            result.removed.update({k: v for k, v in removed.items() if v})
    return result
