"""Deletion endpoints shared by every archivable resource.

``register_deletion_routes`` attaches delete, restore, related-records and
deletion-options handlers for one entity type to a blueprint.
"""
from flask import request, jsonify
from flask_login import login_required
from ..deletion import (
    InvalidRequest, delete_entity, get_descriptor, require_deletion_permission, restore,
)
from ..deletion.dialog import build_deletion_options
from ..deletion.inspector import as_record_list, get_related_records
from ..extensions import db
from .auth.routes import current_auth, role_required

# largest value a signed 64-bit INTEGER column can hold
MAX_ID = 2**63 - 1


def deletion_params():
    cascade = (request.args.get("cascade") or "").strip().lower() == "true"
    delete_reason = request.args.get("deleteReason") or None
    raw = request.args.get("reassignTo")
    reassign_to = None
    if raw:
        try:
            reassign_to = int(raw)
        except ValueError:
            raise InvalidRequest("reassignTo must be a numeric id") from None
        if not 0 < reassign_to <= MAX_ID:
            raise InvalidRequest("reassignTo is out of range")
    return cascade, delete_reason, reassign_to


def register_deletion_routes(bp, plural, prefix="", inspect=True):
    descriptor = get_descriptor(plural)
    ep = plural.replace("-", "_")

    def delete(entity_id):
        cascade, delete_reason, reassign_to = deletion_params()
        result = delete_entity(descriptor, entity_id, current_auth(), cascade=cascade,
                               delete_reason=delete_reason, reassign_to=reassign_to)
        return jsonify(result.to_dict())

    def restore_entity(entity_id):
        auth = current_auth()
        require_deletion_permission(auth, descriptor.name, "restore")
        result = restore(descriptor, entity_id, restored_by=auth.user_id)
        return jsonify(result.to_dict())

    bp.add_url_rule(f"{prefix}/<int:entity_id>", f"{ep}_delete", delete, methods=["DELETE"])
    bp.add_url_rule(f"{prefix}/<int:entity_id>/restore", f"{ep}_restore", restore_entity,
                    methods=["POST"])
    if not inspect:
        return

    @login_required
    @role_required("admin", "staff")
    def related_records(entity_id):
        entity = db.get_or_404(descriptor.model, entity_id, description=f"{descriptor.title} not found")
        return jsonify({"records": as_record_list(get_related_records(descriptor, entity.id))})

    @login_required
    @role_required("admin")
    def deletion_options(entity_id):
        entity = db.get_or_404(descriptor.model, entity_id, description=f"{descriptor.title} not found")
        return jsonify(build_deletion_options(descriptor, entity))

    bp.add_url_rule(f"{prefix}/<int:entity_id>/related-records", f"{ep}_related_records",
                    related_records, methods=["GET"])
    bp.add_url_rule(f"{prefix}/<int:entity_id>/deletion-options", f"{ep}_deletion_options",
                    deletion_options, methods=["GET"])
