from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import Optional
from models import chart_of_accounts as chart_of_accounts_model
from models import journal_line as journal_line_model
from models.chart_of_accounts import AccountCode
from schemas.chart_of_accounts import ChartOfAccountsCreate, ChartOfAccountsUpdate
import logging

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNTS = [
    {"account_code": AccountCode.CASH, "account_name": "Cash", "account_type": "Asset"},
    {"account_code": AccountCode.BANK, "account_name": "Bank", "account_type": "Asset"},
    {"account_code": AccountCode.ACCOUNTS_RECEIVABLE, "account_name": "Accounts Receivable", "account_type": "Asset"},
    {"account_code": AccountCode.ACCOUNTS_PAYABLE, "account_name": "Accounts Payable", "account_type": "Liability"},
    {"account_code": AccountCode.SALES_REVENUE, "account_name": "Sales Revenue", "account_type": "Revenue"},
    {"account_code": AccountCode.OTHER_INCOME, "account_name": "Other Income", "account_type": "Revenue"},
    {"account_code": AccountCode.OPERATING_EXPENSES, "account_name": "Operating Expenses", "account_type": "Expense"},
    {"account_code": AccountCode.SALARIES_EXPENSE, "account_name": "Salaries Expense", "account_type": "Expense"},
    {"account_code": AccountCode.RENT_EXPENSE, "account_name": "Rent Expense", "account_type": "Expense"},
    {"account_code": AccountCode.UTILITIES_EXPENSE, "account_name": "Utilities Expense", "account_type": "Expense"},
    {"account_code": AccountCode.OTHER_EXPENSES, "account_name": "Other Expenses", "account_type": "Expense"},
]

def _tenant_filter(tenant_id: Optional[str]):
    if tenant_id is None:
        return chart_of_accounts_model.ChartOfAccounts.tenant_id.is_(None)
    return chart_of_accounts_model.ChartOfAccounts.tenant_id == tenant_id

def get_account_by_code(db: Session, account_code: str, tenant_id: Optional[str]):
    return db.query(chart_of_accounts_model.ChartOfAccounts).filter(
        chart_of_accounts_model.ChartOfAccounts.account_code == account_code,
        _tenant_filter(tenant_id)
    ).first()

def get_account(db: Session, account_id: int, tenant_id: str):
    return db.query(chart_of_accounts_model.ChartOfAccounts).filter(
        chart_of_accounts_model.ChartOfAccounts.id == account_id,
        chart_of_accounts_model.ChartOfAccounts.tenant_id == tenant_id
    ).first()

def resolve_account(db: Session, account_code: str, tenant_id: str):
    """
    Resolve an account code for posting.

    A tenant's own account wins over the shared (tenant-less) default with the
    same code. Inactive accounts do not resolve.
    """
    candidates = db.query(chart_of_accounts_model.ChartOfAccounts).filter(
        chart_of_accounts_model.ChartOfAccounts.account_code == account_code,
        chart_of_accounts_model.ChartOfAccounts.is_active == True,
        or_(
            chart_of_accounts_model.ChartOfAccounts.tenant_id == tenant_id,
            chart_of_accounts_model.ChartOfAccounts.tenant_id.is_(None)
        )
    ).all()

    for account in candidates:
        if account.tenant_id == tenant_id:
            return account
    return candidates[0] if candidates else None

def get_accounts(db: Session, tenant_id: str, account_type: str = None, include_shared: bool = True, skip: int = 0, limit: int = 100):
    tenant_clause = chart_of_accounts_model.ChartOfAccounts.tenant_id == tenant_id
    if include_shared:
        tenant_clause = or_(tenant_clause, chart_of_accounts_model.ChartOfAccounts.tenant_id.is_(None))

    query = db.query(chart_of_accounts_model.ChartOfAccounts).filter(
        tenant_clause,
        chart_of_accounts_model.ChartOfAccounts.is_active == True
    )

    if account_type:
        query = query.filter(chart_of_accounts_model.ChartOfAccounts.account_type == account_type)

    return query.order_by(chart_of_accounts_model.ChartOfAccounts.account_code).offset(skip).limit(limit).all()

def create_account(db: Session, account: ChartOfAccountsCreate, tenant_id: Optional[str], user_id: str = None):
    db_account = chart_of_accounts_model.ChartOfAccounts(**account.model_dump(), tenant_id=tenant_id, created_by=user_id)
    db.add(db_account)
    db.commit()
    db.refresh(db_account)
    return db_account

def is_account_in_use(db: Session, account_id: int) -> bool:
    return db.query(journal_line_model.JournalLine.id).filter(
        journal_line_model.JournalLine.account_id == account_id
    ).first() is not None

def update_account(db: Session, account_id: int, account_update: ChartOfAccountsUpdate, tenant_id: str, user_id: str = None):
    db_account = get_account(db, account_id, tenant_id)
    if not db_account:
        return None

    update_data = account_update.model_dump(exclude_unset=True)

    if 'account_type' in update_data and update_data['account_type'] != db_account.account_type:
        if is_account_in_use(db, account_id):
            raise ValueError("Cannot change account type for an account that is in use by journal entries.")

    if 'is_active' in update_data and update_data['is_active'] is False:
        if is_account_in_use(db, account_id):
            raise ValueError("Cannot deactivate account because it is referenced by journal lines.")

    for key, value in update_data.items():
        setattr(db_account, key, value)
    db_account.updated_by = user_id

    db.commit()
    db.refresh(db_account)
    return db_account

def delete_account(db: Session, account_id: int, tenant_id: str):
    db_account = get_account(db, account_id, tenant_id)
    if not db_account:
        return False

    if is_account_in_use(db, account_id):
        raise ValueError("Cannot delete account because it is referenced by journal lines.")

    # Soft delete by setting is_active to False
    db_account.is_active = False
    db.commit()
    return True

def initialize_default_accounts(db: Session, tenant_id: Optional[str], user_id: str = None):
    """
    Seed the default chart of accounts for a tenant.

    With tenant_id None the accounts are created as shared defaults. Codes that
    already exist for the scope are left untouched. Returns the created accounts.
    """
    created = []
    for account_data in DEFAULT_ACCOUNTS:
        existing = get_account_by_code(db, account_data["account_code"], tenant_id)
        if not existing:
            logger.info(f"Seeding default account '{account_data['account_name']}' ({account_data['account_code']}) for tenant {tenant_id or 'shared'}")
            created.append(create_account(db, ChartOfAccountsCreate(**account_data), tenant_id, user_id))

    return created
