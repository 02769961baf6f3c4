from datetime import date, datetime
from decimal import Decimal


def _display(value):
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value


def _camel(name):
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def serialize_archived(descriptor, entity):
    row = {"id": entity.id}
    for name in descriptor.archive_fields:
        row[_camel(name)] = _display(getattr(entity, name))
    row.update(entity.deletion_envelope())
    return row


def list_archived(descriptor, page=1, limit=10, max_limit=100):
    page = max(page or 1, 1)
    limit = min(max(limit or 1, 1), max_limit)
    model = descriptor.model

    query = model.archived().order_by(model.deleted_at.desc(), model.id.desc())
    total = query.count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    pages = (total + limit - 1) // limit

    return {
        descriptor.collection_key: [serialize_archived(descriptor, e) for e in items],
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": pages,
    }
