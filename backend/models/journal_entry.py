from sqlalchemy import Column, Integer, String, Date, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin

JOURNAL_ENTRY_STATUS_POSTED = "POSTED"

class JournalEntry(Base, TimestampMixin):
    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True, nullable=False)
    entry_number = Column(String(32), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    reference = Column(String, nullable=True, index=True)
    status = Column(String(20), nullable=False, default=JOURNAL_ENTRY_STATUS_POSTED)

    # Relationships
    lines = relationship(
        "JournalLine",
        back_populates="journal_entry",
        cascade="all, delete-orphan",
        order_by="JournalLine.line_number",
    )

    __table_args__ = (
        UniqueConstraint('tenant_id', 'entry_number', name='_tenant_entry_number_uc'),
    )
