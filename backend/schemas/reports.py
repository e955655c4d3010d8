from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import List, Optional

class TrialBalanceRow(BaseModel):
    account_code: str
    account_name: str
    account_type: str
    debit: Decimal
    credit: Decimal

class TrialBalance(BaseModel):
    as_of: date
    rows: List[TrialBalanceRow]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool

class DeletionWithReversal(BaseModel):
    id: int
    deleted: bool = True
    reversal_entry_id: Optional[int] = None
    reversal_entry_number: Optional[str] = None
