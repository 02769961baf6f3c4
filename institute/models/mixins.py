from datetime import datetime, timezone
from sqlalchemy.orm import declared_attr
from ..extensions import db


def utcnow():
    return datetime.now(timezone.utc)


def isoformat(value):
    return value.isoformat() if value is not None else None


class SoftDeleteMixin:
    """Deletion envelope shared by every archivable table.

    An active row has ``is_deleted`` False and the three other envelope
    fields set to None. Subclasses declare ``delete_reasons``, the enum of
    reasons accepted for that table.
    """

    delete_reasons = None

    is_deleted = db.Column(db.Boolean, nullable=False, default=False, index=True)
    deleted_at = db.Column(db.DateTime(timezone=True))
    deleted_by = db.Column(db.Integer)

    @declared_attr
    def delete_reason(cls):
        return db.Column(db.Enum(cls.delete_reasons, native_enum=False, length=32,
                                 validate_strings=True))

    @classmethod
    def active(cls):
        return cls.query.filter(cls.is_deleted.is_(False))

    @classmethod
    def archived(cls):
        return cls.query.filter(cls.is_deleted.is_(True))

    @staticmethod
    def archive_values(deleted_by, reason):
        """Envelope column values for a row being archived now."""
        return {"is_deleted": True, "deleted_at": utcnow(), "deleted_by": deleted_by,
                "delete_reason": reason}

    @staticmethod
    def restore_values():
        return {"is_deleted": False, "deleted_at": None, "deleted_by": None,
                "delete_reason": None}

    def envelope_is_consistent(self):
        if self.is_deleted:
            return self.deleted_at is not None and self.delete_reason is not None
        return self.deleted_at is None and self.deleted_by is None and self.delete_reason is None

    def deletion_envelope(self):
        return {
            "isDeleted": bool(self.is_deleted),
            "deletedAt": isoformat(self.deleted_at),
            "deletedBy": self.deleted_by,
            "deleteReason": self.delete_reason.value if self.delete_reason else None,
        }
