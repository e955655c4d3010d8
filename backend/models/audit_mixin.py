from sqlalchemy import Column, DateTime, String
from utils.timezone import now_local


class TimestampMixin:
    """Mixin that provides created/updated timestamps and user info.

    Journal entries and accounts use this mixin only: they are never
    soft-deleted, a posted entry is corrected through a reversal entry.
    """
    # DateTime(timezone=True) ensures the timezone info is persisted in the database.
    created_at = Column(DateTime(timezone=True), default=now_local)
    updated_at = Column(DateTime(timezone=True), onupdate=now_local)
    created_by = Column(String, nullable=True)
    updated_by = Column(String, nullable=True)


class SoftDeleteMixin:
    """Mixin for soft-delete columns (deleted_at, deleted_by).

    Applied to business records (transactions, expenses) so a deleted record
    keeps its row for the audit trail while the global filter in
    `database.add_soft_delete_filter` hides it from queries.
    """
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    deleted_by = Column(String, nullable=True)


class AuditMixin(TimestampMixin, SoftDeleteMixin):
    """Timestamps + soft-delete, for records that are deleted by users."""
    pass
