from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from database import get_db
from schemas.chart_of_accounts import ChartOfAccounts, ChartOfAccountsCreate, ChartOfAccountsUpdate
from crud import chart_of_accounts as crud_accounts
from utils.tenancy import get_tenant_id, get_user_id

router = APIRouter(
    prefix="/chart-of-accounts",
    tags=["Chart of Accounts"],
)

@router.post("/", response_model=ChartOfAccounts, status_code=status.HTTP_201_CREATED)
def create_account(
    account: ChartOfAccountsCreate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id)
):
    # Check if account code already exists for this tenant
    if crud_accounts.get_account_by_code(db, account.account_code, tenant_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Account with code {account.account_code} already exists"
        )
    return crud_accounts.create_account(db, account, tenant_id, user_id)

@router.post("/seed-defaults", response_model=List[ChartOfAccounts], status_code=status.HTTP_201_CREATED)
def seed_default_accounts(
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id)
):
    """
    Create the default account codes the ledger posts to. Returns only the
    accounts that did not exist yet.
    """
    return crud_accounts.initialize_default_accounts(db, tenant_id, user_id)

@router.get("/", response_model=List[ChartOfAccounts])
def get_accounts(
    account_type: Optional[str] = None,
    include_shared: bool = True,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id)
):
    return crud_accounts.get_accounts(db, tenant_id, account_type=account_type, include_shared=include_shared)

@router.get("/{account_id}", response_model=ChartOfAccounts)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id)
):
    account = crud_accounts.get_account(db, account_id, tenant_id)
    if not account:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Account with id {account_id} not found"
        )
    return account

@router.patch("/{account_id}", response_model=ChartOfAccounts)
def update_account(
    account_id: int,
    account_update: ChartOfAccountsUpdate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id)
):
    try:
        account = crud_accounts.update_account(db, account_id, account_update, tenant_id, user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not account:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Account with id {account_id} not found"
        )
    return account

@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: int,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id)
):
    try:
        deleted = crud_accounts.delete_account(db, account_id, tenant_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Account with id {account_id} not found"
        )
    return None
