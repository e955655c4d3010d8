from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date
from decimal import Decimal
from typing import Optional

from models.transactions import TRANSACTION_TYPES

class TransactionBase(BaseModel):
    type: str
    category: Optional[str] = None
    description: Optional[str] = None
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    date: date
    notes: Optional[str] = None

    @field_validator('description', 'category')
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return v
        return v.strip() or None

    @field_validator('type')
    @classmethod
    def validate_type(cls, v):
        v = v.upper()
        if v not in TRANSACTION_TYPES:
            raise ValueError(f"type must be one of {list(TRANSACTION_TYPES)}")
        return v

class TransactionCreate(TransactionBase):
    pass

class Transaction(TransactionBase):
    id: int
    tenant_id: str
    status: str
    created_by: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
