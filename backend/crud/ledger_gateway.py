from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date

from crud import chart_of_accounts as crud_accounts
from crud import journal_entry as crud_journal
from crud import transactions as crud_transactions
from crud import expenses as crud_expenses


class LedgerGateway:
    """
    Persistence gateway for the ledger posting service.

    Wraps one SQLAlchemy session; build one per request (or per unit of work)
    and hand it to `LedgerPostingService`.
    """

    def __init__(self, db: Session):
        self.db = db

    def lookup_account_id(self, account_code: str, tenant_id: str) -> Optional[int]:
        account = crud_accounts.resolve_account(self.db, account_code, tenant_id)
        return account.id if account else None

    def count_entries(self, tenant_id: str) -> int:
        return crud_journal.count_journal_entries(self.db, tenant_id)

    def create_entry(
        self,
        tenant_id: str,
        entry_date: date,
        description: str,
        lines: List[dict],
        reference: Optional[str] = None,
        created_by: Optional[str] = None,
    ):
        return crud_journal.create_journal_entry(
            self.db,
            tenant_id=tenant_id,
            entry_date=entry_date,
            description=description,
            lines=lines,
            reference=reference,
            created_by=created_by,
        )

    def get_entry(self, entry_id: int, tenant_id: Optional[str] = None):
        return crud_journal.get_journal_entry(self.db, entry_id, tenant_id)

    def find_entry_by_reference(self, reference: str, tenant_id: Optional[str] = None):
        return crud_journal.find_journal_entry_by_reference(self.db, reference, tenant_id)

    def get_transaction(self, transaction_id: int, tenant_id: Optional[str] = None):
        return crud_transactions.get_transaction(self.db, transaction_id, tenant_id)

    def delete_transaction(self, db_transaction, user_id: Optional[str] = None):
        return crud_transactions.delete_transaction(self.db, db_transaction, user_id)

    def get_expense(self, expense_id: int, tenant_id: Optional[str] = None):
        return crud_expenses.get_expense(self.db, expense_id, tenant_id)

    def delete_expense(self, db_expense, user_id: Optional[str] = None):
        return crud_expenses.delete_expense(self.db, db_expense, user_id)
