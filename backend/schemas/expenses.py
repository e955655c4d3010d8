from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date
from decimal import Decimal
from typing import Optional

class ExpenseBase(BaseModel):
    date: date
    description: str = Field(..., min_length=1)
    category: Optional[str] = None
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    vendor: Optional[str] = None
    notes: Optional[str] = None

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("description must not be blank")
        return v

class ExpenseCreate(ExpenseBase):
    pass

class Expense(ExpenseBase):
    id: int
    tenant_id: str
    created_by: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
