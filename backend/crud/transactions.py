from sqlalchemy.orm import Session
from crud.audit_log import create_audit_log
from schemas.audit_log import AuditLogCreate
from utils import sqlalchemy_to_dict
from utils.timezone import now_local
from models import transactions as models
from schemas import transactions as schemas
from datetime import date
from typing import List, Optional

def get_transaction(db: Session, transaction_id: int, tenant_id: Optional[str] = None):
    query = db.query(models.Transaction).filter(models.Transaction.id == transaction_id)
    if tenant_id is not None:
        query = query.filter(models.Transaction.tenant_id == tenant_id)
    return query.first()

def get_transactions(db: Session, tenant_id: str, type: Optional[str] = None, start_date: Optional[date] = None, end_date: Optional[date] = None, skip: int = 0, limit: int = 100) -> List[models.Transaction]:
    query = db.query(models.Transaction).filter(models.Transaction.tenant_id == tenant_id)
    if type:
        query = query.filter(models.Transaction.type == type.upper())
    if start_date:
        query = query.filter(models.Transaction.date >= start_date)
    if end_date:
        query = query.filter(models.Transaction.date <= end_date)
    return query.order_by(models.Transaction.date.desc(), models.Transaction.id.desc()).offset(skip).limit(limit).all()

def default_category(transaction_type: str) -> str:
    return "General Income" if transaction_type == "INCOME" else "General Expense"

def create_transaction(db: Session, transaction: schemas.TransactionCreate, tenant_id: str, user_id: str):
    data = transaction.model_dump()
    if not data.get("category"):
        data["category"] = default_category(data["type"])
    db_transaction = models.Transaction(**data, tenant_id=tenant_id, created_by=user_id)
    db.add(db_transaction)
    db.commit()
    db.refresh(db_transaction)
    return db_transaction

def delete_transaction(db: Session, db_transaction: models.Transaction, user_id: str = None):
    old_values = sqlalchemy_to_dict(db_transaction)
    # Soft-delete
    db_transaction.deleted_at = now_local()
    db_transaction.deleted_by = user_id
    create_audit_log(db, AuditLogCreate(
        tenant_id=db_transaction.tenant_id,
        table_name='transactions',
        record_id=str(db_transaction.id),
        changed_by=user_id or 'system',
        action='DELETE',
        old_values=old_values or {},
        new_values=sqlalchemy_to_dict(db_transaction) or {}
    ), commit=False)
    db.commit()
    return db_transaction
