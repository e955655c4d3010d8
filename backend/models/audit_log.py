from sqlalchemy import Column, Integer, String, DateTime, JSON
from database import Base
from utils.timezone import now_local

class AuditLog(Base):
    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True, nullable=True)
    table_name = Column(String, nullable=False)
    record_id = Column(String, nullable=False)
    changed_at = Column(DateTime(timezone=True), default=now_local)
    changed_by = Column(String, nullable=False)
    action = Column(String, nullable=False)  # e.g., 'INSERT', 'UPDATE', 'DELETE'
    old_values = Column(JSON)
    new_values = Column(JSON)
