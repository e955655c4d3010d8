from pydantic import BaseModel, ConfigDict, Field, model_validator
from decimal import Decimal
from typing import Optional

class JournalLineCreate(BaseModel):
    account_code: str
    debit: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    credit: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    description: Optional[str] = None

    @model_validator(mode='after')
    def check_one_side(self):
        if (self.debit > 0) == (self.credit > 0):
            raise ValueError('Each line must carry exactly one of debit or credit.')
        return self

class JournalLine(BaseModel):
    id: int
    journal_entry_id: int
    account_id: int
    debit: Decimal
    credit: Decimal
    description: Optional[str] = None
    line_number: int

    model_config = ConfigDict(from_attributes=True)
