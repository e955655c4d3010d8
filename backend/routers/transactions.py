from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from database import get_db
from schemas import transactions as schemas
from schemas.reports import DeletionWithReversal
from crud import transactions as crud
from services.ledger_posting import LedgerPostingService, validate_posting_input
from routers.dependencies import get_ledger_service
from utils.tenancy import get_tenant_id, get_user_id
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/transactions",
    tags=["Transactions"],
)

@router.post("/", response_model=schemas.Transaction, status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction: schemas.TransactionCreate,
    db: Session = Depends(get_db),
    ledger: LedgerPostingService = Depends(get_ledger_service),
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id)
):
    description = transaction.description or transaction.category or crud.default_category(transaction.type)
    try:
        validate_posting_input(transaction.amount, description)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    db_transaction = crud.create_transaction(db=db, transaction=transaction, tenant_id=tenant_id, user_id=user_id)

    # The transaction stays saved even when its journal entry cannot be posted.
    reference = str(db_transaction.id)
    if db_transaction.type == "INCOME":
        entry = ledger.post_income(tenant_id, db_transaction.amount, description, db_transaction.date, reference, user_id)
    elif db_transaction.type == "EXPENSE":
        entry = ledger.post_expense(tenant_id, db_transaction.amount, description, db_transaction.category, db_transaction.date, reference, user_id)
    else:
        entry = None
        logger.info(f"Transaction {db_transaction.id} of type {db_transaction.type} has no automatic journal entry")

    if entry is None and db_transaction.type in ("INCOME", "EXPENSE"):
        logger.error(f"Transaction {db_transaction.id} saved without journal entry (tenant {tenant_id})")
    return db_transaction

@router.get("/", response_model=List[schemas.Transaction])
def read_transactions(
    type: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id)
):
    return crud.get_transactions(db=db, tenant_id=tenant_id, type=type, start_date=start_date, end_date=end_date, skip=skip, limit=limit)

@router.get("/{transaction_id}", response_model=schemas.Transaction)
def read_transaction(transaction_id: int, db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    db_transaction = crud.get_transaction(db=db, transaction_id=transaction_id, tenant_id=tenant_id)
    if db_transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return db_transaction

@router.delete("/{transaction_id}", response_model=DeletionWithReversal)
def delete_transaction(
    transaction_id: int,
    ledger: LedgerPostingService = Depends(get_ledger_service),
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id)
):
    outcome = ledger.delete_transaction_with_reversal(transaction_id, author=user_id, tenant_id=tenant_id)
    if outcome is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return DeletionWithReversal(
        id=outcome.record_id,
        reversal_entry_id=outcome.reversal.id if outcome.reversal else None,
        reversal_entry_number=outcome.reversal.entry_number if outcome.reversal else None,
    )
