"""State for the progressive deletion dialog.

The client renders three tabs (archive, reassign, delete permanently) and
asks the server which ones apply to a given record.
"""
from .inspector import as_record_list, get_related_records, has_blocking_records


def _reassign_candidates(descriptor, entity):
    if not descriptor.reassignments:
        return []
    model = descriptor.model
    others = model.active().filter(model.id != entity.id).order_by(model.id).all()
    return [{"id": o.id, "name": descriptor.label(o)} for o in others]


def build_deletion_options(descriptor, entity):
    counts = get_related_records(descriptor, entity.id)
    blocked = has_blocking_records(counts)
    candidates = _reassign_candidates(descriptor, entity)
    reassignable = any(counts.get(r.key, 0) for r in descriptor.reassignments)

    return {
        "entityType": descriptor.name,
        "entityId": entity.id,
        "entityName": descriptor.label(entity),
        "isDeleted": bool(entity.is_deleted),
        "relatedRecords": as_record_list(counts),
        "hasRelatedRecords": blocked,
        "totalRelatedRecords": sum(counts.values()),
        "tabs": {
            "archive": not entity.is_deleted and not blocked,
            "reassign": not entity.is_deleted and reassignable and bool(candidates),
            "deletePermanently": True,
        },
        "deleteReasons": [r.value for r in descriptor.reasons],
        "reassignCandidates": candidates,
    }
