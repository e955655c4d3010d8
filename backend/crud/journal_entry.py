from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload
from models import journal_entry as journal_entry_model
from models import journal_line as journal_line_model
from typing import List, Optional
from datetime import date
from utils.timezone import now_local

def count_journal_entries(db: Session, tenant_id: str) -> int:
    return db.query(func.count(journal_entry_model.JournalEntry.id)).filter(
        journal_entry_model.JournalEntry.tenant_id == tenant_id
    ).scalar() or 0

def generate_entry_number(db: Session, tenant_id: str) -> str:
    """
    Next display number for a tenant: JE-<current year>-<count + 1, six digits>.

    The year is the posting year, not the entry's business date.

    Must run in the same transaction as the insert that uses it; the unique
    (tenant_id, entry_number) constraint rejects a concurrent duplicate.
    """
    count = count_journal_entries(db, tenant_id)
    return f"JE-{now_local().year:04d}-{count + 1:06d}"

def create_journal_entry(
    db: Session,
    tenant_id: str,
    entry_date: date,
    description: str,
    lines: List[dict],
    reference: Optional[str] = None,
    created_by: Optional[str] = None,
):
    """
    Creates a journal entry together with its lines in one transaction.

    Each line dict carries account_id, debit, credit and description. Lines
    are numbered from 1 in the order given. Any database failure rolls the
    whole entry back and is re-raised.
    """
    try:
        db_entry = journal_entry_model.JournalEntry(
            entry_number=generate_entry_number(db, tenant_id),
            date=entry_date,
            description=description,
            reference=reference,
            tenant_id=tenant_id,
            created_by=created_by,
            status=journal_entry_model.JOURNAL_ENTRY_STATUS_POSTED,
        )
        for index, line in enumerate(lines, start=1):
            db_entry.lines.append(journal_line_model.JournalLine(
                account_id=line["account_id"],
                debit=line["debit"],
                credit=line["credit"],
                description=line.get("description"),
                line_number=index,
            ))
        db.add(db_entry)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(db_entry)
    return db_entry

def get_journal_entry(db: Session, entry_id: int, tenant_id: Optional[str] = None):
    """
    Retrieves a single journal entry, with its lines, by its ID.
    """
    query = db.query(journal_entry_model.JournalEntry).options(
        selectinload(journal_entry_model.JournalEntry.lines)
    ).filter(journal_entry_model.JournalEntry.id == entry_id)
    if tenant_id is not None:
        query = query.filter(journal_entry_model.JournalEntry.tenant_id == tenant_id)
    return query.first()

def find_journal_entry_by_reference(db: Session, reference: str, tenant_id: Optional[str] = None):
    """
    Exact-match lookup by reference. When several entries share a reference
    the first one posted wins.
    """
    query = db.query(journal_entry_model.JournalEntry).options(
        selectinload(journal_entry_model.JournalEntry.lines)
    ).filter(journal_entry_model.JournalEntry.reference == reference)
    if tenant_id is not None:
        query = query.filter(journal_entry_model.JournalEntry.tenant_id == tenant_id)
    return query.order_by(journal_entry_model.JournalEntry.id.asc()).first()

def get_journal_entries(
    db: Session,
    tenant_id: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: int = 100
):
    """
    Retrieves a list of journal entries with optional date filtering.
    """
    query = db.query(journal_entry_model.JournalEntry).options(
        selectinload(journal_entry_model.JournalEntry.lines)
    ).filter(
        journal_entry_model.JournalEntry.tenant_id == tenant_id
    )

    if start_date:
        query = query.filter(journal_entry_model.JournalEntry.date >= start_date)
    if end_date:
        query = query.filter(journal_entry_model.JournalEntry.date <= end_date)

    return query.order_by(journal_entry_model.JournalEntry.date.desc(), journal_entry_model.JournalEntry.id.desc()).offset(skip).limit(limit).all()
