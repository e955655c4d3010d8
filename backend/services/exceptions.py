"""
Ledger posting errors.

Raised inside the posting service and caught at the boundary of every
public operation, which logs them and returns None to the caller.
"""


class LedgerError(Exception):
    """Base exception for all ledger posting failures."""


class BalanceViolationError(LedgerError):
    """Raised when the debits of an entry do not equal its credits."""

    def __init__(self, total_debit, total_credit):
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(
            f"Unbalanced journal entry: debits ({total_debit}) != credits ({total_credit})"
        )


class AccountNotFoundError(LedgerError):
    """Raised when an account code does not resolve for the tenant."""

    def __init__(self, account_code, tenant_id):
        self.account_code = account_code
        self.tenant_id = tenant_id
        super().__init__(f"Account not found: {account_code} (tenant {tenant_id})")


class PersistenceError(LedgerError):
    """Raised when the atomic write of an entry and its lines fails."""
