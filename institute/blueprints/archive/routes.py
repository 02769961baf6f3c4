from flask import current_app, request, jsonify
from ...deletion import get_descriptor, permanent_delete, require_deletion_permission
from ...deletion.archive import list_archived
from ..auth.routes import current_auth
from . import bp

@bp.get("/<kind>")
def archived(kind):
    descriptor = get_descriptor(kind)
    require_deletion_permission(current_auth(), descriptor.name, "view archived")
    page  = request.args.get("page", type=int) or 1
    limit = request.args.get("limit", type=int) or current_app.config["ARCHIVE_PAGE_SIZE"]
    return jsonify(list_archived(descriptor, page, limit,
                                 current_app.config["ARCHIVE_MAX_PAGE_SIZE"]))

@bp.delete("/<kind>/<int:entity_id>")
def purge(kind, entity_id):
    descriptor = get_descriptor(kind)
    auth = current_auth()
    require_deletion_permission(auth, descriptor.name, "permanently delete")
    result = permanent_delete(descriptor, entity_id, actor=auth.user_id)
    return jsonify(result.to_dict())
