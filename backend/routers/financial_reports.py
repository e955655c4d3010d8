from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from database import get_db
from schemas.reports import TrialBalance
from crud import financial_reports as crud
from utils.tenancy import get_tenant_id

router = APIRouter(
    prefix="/reports",
    tags=["Financial Reports"],
)

@router.get("/trial-balance", response_model=TrialBalance)
def read_trial_balance(as_of: Optional[date] = None, db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    return crud.get_trial_balance(db=db, as_of_date=as_of or date.today(), tenant_id=tenant_id)
