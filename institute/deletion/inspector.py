from .descriptors import EntityDescriptor


def get_related_records(descriptor: EntityDescriptor, entity_id) -> dict:
    """Count the rows that block archiving ``entity_id``.

    Every blocking category is present in the result, 0 when empty. The
    counts are advisory and read outside any transaction.
    """
    return {dep.key: dep.count(entity_id) for dep in descriptor.blocking}


def has_blocking_records(counts):
    return any(count > 0 for count in counts.values())


def as_record_list(counts):
    return [{"type": key, "count": count} for key, count in counts.items()]
