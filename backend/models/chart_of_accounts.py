from sqlalchemy import Column, Integer, String, Text, Boolean, UniqueConstraint
from database import Base
from models.audit_mixin import TimestampMixin

class ChartOfAccounts(Base, TimestampMixin):
    __tablename__ = "chart_of_accounts"

    id = Column(Integer, primary_key=True, index=True)
    account_code = Column(String(20), nullable=False, index=True)
    account_name = Column(String(100), nullable=False)
    account_type = Column(String(20), nullable=False)  # Asset, Liability, Equity, Revenue, Expense
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)
    # NULL tenant marks a shared default account visible to every tenant
    tenant_id = Column(String, index=True, nullable=True)

    __table_args__ = (
        UniqueConstraint('tenant_id', 'account_code', name='_tenant_account_code_uc'),
    )


class AccountCode:
    """Account codes the posting service relies on."""
    CASH = "1000"
    BANK = "1100"
    ACCOUNTS_RECEIVABLE = "1200"
    ACCOUNTS_PAYABLE = "2000"
    SALES_REVENUE = "4000"
    OTHER_INCOME = "4900"
    OPERATING_EXPENSES = "5000"
    SALARIES_EXPENSE = "5100"
    RENT_EXPENSE = "5200"
    UTILITIES_EXPENSE = "5300"
    OTHER_EXPENSES = "5900"
