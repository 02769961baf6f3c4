"""Audit trail for deletion, restore and purge requests.

Entries go to the ``institute.deletion.audit`` logger only; they are never
written to the database.
"""
import logging
from dataclasses import dataclass, field

audit_logger = logging.getLogger("institute.deletion.audit")

ACTIONS = ("attempt", "success", "error")


@dataclass(frozen=True)
class DeletionAttempt:
    entity_type: str
    entity_id: object
    action: str
    metadata: dict = field(default_factory=dict)


def log_deletion_attempt(entity_type, entity_id, action, exc_info=None, **metadata):
    if action not in ACTIONS:
        raise ValueError(f"unknown audit action {action!r}")
    entry = DeletionAttempt(entity_type, entity_id, action, metadata)
    level = logging.ERROR if action == "error" else logging.INFO
    details = " ".join(f"{k}={v!r}" for k, v in metadata.items() if v is not None)
    audit_logger.log(
        level,
        "SOFT_DELETE: %s %s id=%s %s",
        entity_type.upper(), action, entity_id, details,
        exc_info=exc_info,
        extra={
            "entity_type": entity_type,
            "entity_id": entity_id,
            "audit_action": action,
            "audit_metadata": metadata,
        },
    )
    return entry
