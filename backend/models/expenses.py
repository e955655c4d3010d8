from sqlalchemy import Column, Integer, String, Date, Numeric, Text
from database import Base
from models.audit_mixin import AuditMixin

class Expense(Base, AuditMixin):
    __tablename__ = 'expenses'

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    category = Column(String, nullable=True)
    amount = Column(Numeric(14, 2), nullable=False)
    vendor = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
