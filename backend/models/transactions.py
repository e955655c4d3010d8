from sqlalchemy import Column, Integer, String, Date, Numeric, Text
from database import Base
from models.audit_mixin import AuditMixin

TRANSACTION_TYPES = ("INCOME", "EXPENSE", "TRANSFER")

class Transaction(Base, AuditMixin):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True, nullable=False)
    type = Column(String(20), nullable=False)  # INCOME, EXPENSE, TRANSFER
    category = Column(String, nullable=True)
    description = Column(String, nullable=True)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="COMPLETED")
    notes = Column(Text, nullable=True)
