from fastapi import Depends
from sqlalchemy.orm import Session
from database import get_db
from crud.ledger_gateway import LedgerGateway
from services.ledger_posting import LedgerPostingService

def get_ledger_service(db: Session = Depends(get_db)) -> LedgerPostingService:
    return LedgerPostingService(LedgerGateway(db))
