from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from .journal_line import JournalLineCreate, JournalLine

def require_text(value: str, field_name: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field_name} must not be blank")
    return value

class JournalEntryBase(BaseModel):
    date: date
    description: str = Field(..., min_length=1)
    reference: Optional[str] = None

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        return require_text(v, 'description')

class JournalEntryCreate(JournalEntryBase):
    lines: List[JournalLineCreate]

    @field_validator('lines')
    @classmethod
    def check_debits_equal_credits(cls, lines):
        total_debit = sum((line.debit for line in lines), Decimal("0"))
        total_credit = sum((line.credit for line in lines), Decimal("0"))
        if abs(total_debit - total_credit) > Decimal("0.01"):
            raise ValueError('The sum of debits must equal the sum of credits.')
        if total_debit == 0 and total_credit == 0:
            raise ValueError('A journal entry must have non-zero debit and credit amounts.')
        return lines

class JournalEntry(JournalEntryBase):
    id: int
    tenant_id: str
    entry_number: str
    status: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    lines: List[JournalLine] = []

    model_config = ConfigDict(from_attributes=True)

class InvoicePosting(BaseModel):
    invoice_number: str = Field(..., min_length=1)
    customer_name: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    date: date

    @field_validator('invoice_number', 'customer_name')
    @classmethod
    def validate_text(cls, v, info):
        return require_text(v, info.field_name)

class ReversalRequest(BaseModel):
    reason: str = Field(..., min_length=1)

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, v):
        return require_text(v, 'reason')
