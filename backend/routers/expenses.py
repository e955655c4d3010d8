from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from database import get_db
from schemas import expenses as schemas
from schemas.reports import DeletionWithReversal
from crud import expenses as crud
from services.ledger_posting import LedgerPostingService, validate_posting_input
from routers.dependencies import get_ledger_service
from utils.tenancy import get_tenant_id, get_user_id
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/expenses",
    tags=["Expenses"],
)

@router.post("/", response_model=schemas.Expense, status_code=status.HTTP_201_CREATED)
def create_expense(
    expense: schemas.ExpenseCreate,
    db: Session = Depends(get_db),
    ledger: LedgerPostingService = Depends(get_ledger_service),
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id)
):
    try:
        validate_posting_input(expense.amount, expense.description)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    db_expense = crud.create_expense(db=db, expense=expense, tenant_id=tenant_id, user_id=user_id)
    entry = ledger.post_expense(
        tenant_id, db_expense.amount, db_expense.description, db_expense.category, db_expense.date,
        reference=str(db_expense.id), author=user_id
    )
    if entry is None:
        logger.error(f"Expense {db_expense.id} saved without journal entry (tenant {tenant_id})")
    return db_expense

@router.get("/", response_model=List[schemas.Expense])
def read_expenses(start_date: Optional[date] = None, end_date: Optional[date] = None, db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    return crud.get_expenses_by_date_range(db=db, tenant_id=tenant_id, start_date=start_date, end_date=end_date)

@router.get("/{expense_id}", response_model=schemas.Expense)
def read_expense(expense_id: int, db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    db_expense = crud.get_expense(db=db, expense_id=expense_id, tenant_id=tenant_id)
    if db_expense is None:
        raise HTTPException(status_code=404, detail="Expense not found")
    return db_expense

@router.delete("/{expense_id}", response_model=DeletionWithReversal)
def delete_expense(
    expense_id: int,
    ledger: LedgerPostingService = Depends(get_ledger_service),
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id)
):
    outcome = ledger.delete_expense_with_reversal(expense_id, author=user_id, tenant_id=tenant_id)
    if outcome is None:
        raise HTTPException(status_code=404, detail="Expense not found")
    return DeletionWithReversal(
        id=outcome.record_id,
        reversal_entry_id=outcome.reversal.id if outcome.reversal else None,
        reversal_entry_number=outcome.reversal.entry_number if outcome.reversal else None,
    )
