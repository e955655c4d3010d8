from sqlalchemy.orm import Session
from crud.audit_log import create_audit_log
from schemas.audit_log import AuditLogCreate
from utils import sqlalchemy_to_dict
from utils.timezone import now_local
from models import expenses as models
from schemas import expenses as schemas
from datetime import date
from typing import List, Optional

def get_expense(db: Session, expense_id: int, tenant_id: Optional[str] = None):
    query = db.query(models.Expense).filter(models.Expense.id == expense_id)
    if tenant_id is not None:
        query = query.filter(models.Expense.tenant_id == tenant_id)
    return query.first()

def get_expenses_by_date_range(db: Session, tenant_id: str, start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[models.Expense]:
    query = db.query(models.Expense).filter(models.Expense.tenant_id == tenant_id)
    if start_date:
        query = query.filter(models.Expense.date >= start_date)
    if end_date:
        query = query.filter(models.Expense.date <= end_date)
    return query.order_by(models.Expense.date.desc(), models.Expense.id.desc()).all()

def create_expense(db: Session, expense: schemas.ExpenseCreate, tenant_id: str, user_id: str):
    db_expense = models.Expense(**expense.model_dump(), tenant_id=tenant_id, created_by=user_id)
    db.add(db_expense)
    db.commit()
    db.refresh(db_expense)
    return db_expense

def delete_expense(db: Session, db_expense: models.Expense, user_id: str = None):
    old_values = sqlalchemy_to_dict(db_expense)
    # Soft-delete
    db_expense.deleted_at = now_local()
    db_expense.deleted_by = user_id
    create_audit_log(db, AuditLogCreate(
        tenant_id=db_expense.tenant_id,
        table_name='expenses',
        record_id=str(db_expense.id),
        changed_by=user_id or 'system',
        action='DELETE',
        old_values=old_values or {},
        new_values=sqlalchemy_to_dict(db_expense) or {}
    ), commit=False)
    db.commit()
    return db_expense
