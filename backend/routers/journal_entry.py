from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from database import get_db
from schemas.journal_entry import JournalEntry, JournalEntryCreate, InvoicePosting, ReversalRequest
from crud import journal_entry as journal_entry_crud
from services.ledger_posting import LedgerPostingService, PostingLine
from routers.dependencies import get_ledger_service
from utils.tenancy import get_tenant_id, get_user_id

router = APIRouter(
    prefix="/journal-entries",
    tags=["Journal Entries"],
)

NOT_POSTED_DETAIL = "Journal entry could not be posted. Check that the accounts exist for this tenant."

@router.post("/", response_model=JournalEntry, status_code=status.HTTP_201_CREATED)
def create_journal_entry(
    entry: JournalEntryCreate,
    ledger: LedgerPostingService = Depends(get_ledger_service),
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id)
):
    """
    Create a manual journal entry.
    The validation that debits must equal credits is handled in the JournalEntryCreate schema
    and enforced again by the posting service.
    """
    try:
        lines = [
            PostingLine(line.account_code, line.debit, line.credit, line.description or entry.description)
            for line in entry.lines
        ]
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    db_entry = ledger.post_journal_entry(
        tenant_id, entry.date, entry.description, lines, reference=entry.reference, author=user_id
    )
    if db_entry is None:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=NOT_POSTED_DETAIL)
    return db_entry

@router.post("/invoice-issued", response_model=JournalEntry, status_code=status.HTTP_201_CREATED)
def post_invoice_issued(
    invoice: InvoicePosting,
    ledger: LedgerPostingService = Depends(get_ledger_service),
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id)
):
    try:
        db_entry = ledger.post_invoice_issued(
            tenant_id, invoice.amount, invoice.invoice_number, invoice.customer_name, invoice.date, author=user_id
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if db_entry is None:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=NOT_POSTED_DETAIL)
    return db_entry

@router.post("/payment-received", response_model=JournalEntry, status_code=status.HTTP_201_CREATED)
def post_payment_received(
    payment: InvoicePosting,
    ledger: LedgerPostingService = Depends(get_ledger_service),
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id)
):
    try:
        db_entry = ledger.post_payment_received(
            tenant_id, payment.amount, payment.invoice_number, payment.customer_name, payment.date, author=user_id
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if db_entry is None:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=NOT_POSTED_DETAIL)
    return db_entry

@router.get("/", response_model=List[JournalEntry])
def get_journal_entries(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id)
):
    """
    Retrieve a list of journal entries.
    """
    return journal_entry_crud.get_journal_entries(
        db=db,
        tenant_id=tenant_id,
        start_date=start_date,
        end_date=end_date,
        skip=skip,
        limit=limit
    )

@router.get("/by-reference/{reference}", response_model=JournalEntry)
def get_journal_entry_by_reference(
    reference: str,
    ledger: LedgerPostingService = Depends(get_ledger_service),
    tenant_id: str = Depends(get_tenant_id)
):
    db_entry = ledger.find_by_reference(reference, tenant_id)
    if db_entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Journal entry not found")
    return db_entry

@router.get("/{entry_id}", response_model=JournalEntry)
def get_journal_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id)
):
    """
    Retrieve a single journal entry by its ID.
    """
    db_entry = journal_entry_crud.get_journal_entry(db=db, entry_id=entry_id, tenant_id=tenant_id)
    if db_entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Journal entry not found")
    return db_entry

@router.post("/{entry_id}/reverse", response_model=JournalEntry, status_code=status.HTTP_201_CREATED)
def reverse_journal_entry(
    entry_id: int,
    request: ReversalRequest,
    ledger: LedgerPostingService = Depends(get_ledger_service),
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id)
):
    reversal = ledger.reverse(entry_id, request.reason, author=user_id, tenant_id=tenant_id)
    if reversal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Journal entry not found or could not be reversed")
    return reversal
