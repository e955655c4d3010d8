"""
Ledger Posting Service

Turns business events into balanced double-entry journal entries:

- Income received:      Dr Cash                 / Cr Other Income
- Expense paid:         Dr <classified expense> / Cr Cash
- Invoice issued:       Dr Accounts Receivable  / Cr Sales Revenue
- Payment on invoice:   Dr Bank                 / Cr Accounts Receivable

Posted entries are never edited. A correction is a reversal entry that
mirrors every line of the original with debit and credit swapped.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError

from crud.ledger_gateway import LedgerGateway
from models.chart_of_accounts import AccountCode
from models.journal_entry import JournalEntry
from services.exceptions import (
    AccountNotFoundError,
    BalanceViolationError,
    LedgerError,
    PersistenceError,
)
from utils.tenancy import DEFAULT_AUTHOR

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
BALANCE_TOLERANCE = Decimal("0.01")

# Evaluated top to bottom, first match wins.
EXPENSE_CATEGORY_RULES: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("salario", "payroll", "sueldo"), AccountCode.SALARIES_EXPENSE),
    (("alquiler", "rent"), AccountCode.RENT_EXPENSE),
    (("servicio", "utility", "luz", "agua"), AccountCode.UTILITIES_EXPENSE),
)
DEFAULT_EXPENSE_ACCOUNT = AccountCode.OTHER_EXPENSES


def to_money(value) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return amount.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def classify_expense_account(category: Optional[str]) -> str:
    """Map an expense category to an expense account code."""
    category_lower = (category or "").lower()
    for keywords, account_code in EXPENSE_CATEGORY_RULES:
        if any(keyword in category_lower for keyword in keywords):
            return account_code
    return DEFAULT_EXPENSE_ACCOUNT


@dataclass(frozen=True)
class PostingLine:
    """
    One side of a posting, addressed by account code.

    Exactly one of debit or credit is non-zero.
    """
    account_code: str
    debit: Decimal
    credit: Decimal
    description: str = ""

    def __post_init__(self):
        debit = to_money(self.debit)
        credit = to_money(self.credit)
        if debit < 0 or credit < 0:
            raise ValueError("Journal line amounts cannot be negative")
        if (debit == 0) == (credit == 0):
            raise ValueError("Journal line must carry exactly one of debit or credit")
        object.__setattr__(self, "debit", debit)
        object.__setattr__(self, "credit", credit)

    @classmethod
    def debit_line(cls, account_code: str, amount, description: str = "") -> "PostingLine":
        return cls(account_code, to_money(amount), Decimal("0"), description)

    @classmethod
    def credit_line(cls, account_code: str, amount, description: str = "") -> "PostingLine":
        return cls(account_code, Decimal("0"), to_money(amount), description)


@dataclass
class DeletionOutcome:
    record_id: int
    reversal: Optional[JournalEntry] = None


def check_balance(amounts: Iterable[Tuple[Decimal, Decimal]]) -> Tuple[Decimal, Decimal]:
    """
    Validate the double-entry law for a set of (debit, credit) pairs.

    Raises BalanceViolationError when debits and credits differ by more than
    one cent, or when the entry moves no money at all.
    """
    total_debit = Decimal("0")
    total_credit = Decimal("0")
    for debit, credit in amounts:
        total_debit += Decimal(debit)
        total_credit += Decimal(credit)

    if abs(total_debit - total_credit) > BALANCE_TOLERANCE:
        raise BalanceViolationError(total_debit, total_credit)
    if total_debit == 0 and total_credit == 0:
        raise BalanceViolationError(total_debit, total_credit)
    return total_debit, total_credit


class LedgerPostingService:
    def __init__(self, gateway: LedgerGateway):
        self.gateway = gateway

    # ------------------------------------------------------------------
    # Generic posting path
    # ------------------------------------------------------------------

    def post_journal_entry(
        self,
        tenant_id: str,
        entry_date: date,
        description: str,
        lines: List[PostingLine],
        reference: Optional[str] = None,
        author: Optional[str] = None,
    ):
        """
        Post a journal entry made of the given lines.

        Returns the created entry (with lines), or None when the entry was
        refused or could not be written. Failures are logged.
        """
        try:
            return self._post(tenant_id, entry_date, description, lines, reference, author)
        except LedgerError as e:
            logger.error(f"Journal entry '{description}' not posted for tenant {tenant_id}: {e}")
            return None

    def _post(self, tenant_id, entry_date, description, lines, reference, author):
        check_balance((line.debit, line.credit) for line in lines)

        resolved = []
        for line in lines:
            account_id = self.gateway.lookup_account_id(line.account_code, tenant_id)
            if account_id is None:
                raise AccountNotFoundError(line.account_code, tenant_id)
            resolved.append({
                "account_id": account_id,
                "debit": line.debit,
                "credit": line.credit,
                "description": line.description,
            })

        entry = self._write(tenant_id, entry_date, description, resolved, reference, author)
        logger.info(f"Journal entry posted: {entry.entry_number} (tenant {tenant_id})")
        return entry

    def _write(self, tenant_id, entry_date, description, lines, reference, author):
        try:
            return self.gateway.create_entry(
                tenant_id=tenant_id,
                entry_date=entry_date,
                description=description,
                lines=lines,
                reference=reference,
                created_by=author or DEFAULT_AUTHOR,
            )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not write journal entry: {e}") from e

    # ------------------------------------------------------------------
    # Business events
    # ------------------------------------------------------------------

    def post_income(self, tenant_id: str, amount, description: str, entry_date: date,
                    reference: Optional[str] = None, author: Optional[str] = None):
        amount = _require_positive(amount)
        _require_text(description, "description")
        return self.post_journal_entry(
            tenant_id,
            entry_date,
            f"Income: {description}",
            [
                PostingLine.debit_line(AccountCode.CASH, amount, "Cash received"),
                PostingLine.credit_line(AccountCode.OTHER_INCOME, amount, description),
            ],
            reference,
            author,
        )

    def post_expense(self, tenant_id: str, amount, description: str, category: Optional[str],
                     entry_date: date, reference: Optional[str] = None, author: Optional[str] = None):
        amount = _require_positive(amount)
        _require_text(description, "description")
        expense_account = classify_expense_account(category)
        return self.post_journal_entry(
            tenant_id,
            entry_date,
            f"Expense: {description}",
            [
                PostingLine.debit_line(expense_account, amount, description),
                PostingLine.credit_line(AccountCode.CASH, amount, "Expense payment"),
            ],
            reference,
            author,
        )

    def post_invoice_issued(self, tenant_id: str, amount, invoice_number: str, customer_name: str,
                            entry_date: date, author: Optional[str] = None):
        amount = _require_positive(amount)
        _require_text(invoice_number, "invoice_number")
        return self.post_journal_entry(
            tenant_id,
            entry_date,
            f"Invoice {invoice_number} - {customer_name}",
            [
                PostingLine.debit_line(AccountCode.ACCOUNTS_RECEIVABLE, amount, f"AR - {customer_name}"),
                PostingLine.credit_line(AccountCode.SALES_REVENUE, amount, f"Sale - {invoice_number}"),
            ],
            invoice_number,
            author,
        )

    def post_payment_received(self, tenant_id: str, amount, invoice_number: str, customer_name: str,
                              entry_date: date, author: Optional[str] = None):
        amount = _require_positive(amount)
        _require_text(invoice_number, "invoice_number")
        return self.post_journal_entry(
            tenant_id,
            entry_date,
            f"Payment Invoice {invoice_number} - {customer_name}",
            [
                PostingLine.debit_line(AccountCode.BANK, amount, f"Deposit - {invoice_number}"),
                PostingLine.credit_line(AccountCode.ACCOUNTS_RECEIVABLE, amount, f"Collection - {customer_name}"),
            ],
            payment_reference(invoice_number),
            author,
        )

    # ------------------------------------------------------------------
    # Reversal and lookup
    # ------------------------------------------------------------------

    def reverse(self, entry_id: int, reason: str, author: Optional[str] = None, tenant_id: Optional[str] = None):
        """
        Post a contra-entry for a journal entry.

        The reversal keeps the original business date so period reports show
        it in the period of the entry it cancels. Returns None when the entry
        does not exist or the reversal could not be written.
        """
        original = self.gateway.get_entry(entry_id, tenant_id)
        if original is None:
            logger.info(f"Journal entry {entry_id} not found, nothing to reverse")
            return None

        reversed_lines = [
            {
                "account_id": line.account_id,
                "debit": line.credit,
                "credit": line.debit,
                "description": f"REVERSAL: {line.description or ''}",
            }
            for line in original.lines
        ]

        try:
            check_balance((line["debit"], line["credit"]) for line in reversed_lines)
            entry = self._write(
                original.tenant_id,
                original.date,
                f"REVERSAL: {original.description} - {reason}",
                reversed_lines,
                f"REV-{original.entry_number}",
                author,
            )
        except LedgerError as e:
            logger.error(f"Could not reverse journal entry {original.entry_number}: {e}")
            return None

        logger.info(f"Journal entry reversed: {original.entry_number} -> {entry.entry_number}")
        return entry

    def find_by_reference(self, reference: str, tenant_id: Optional[str] = None):
        return self.gateway.find_entry_by_reference(reference, tenant_id)

    # ------------------------------------------------------------------
    # Delete business records with accounting reversal
    # ------------------------------------------------------------------

    def delete_transaction_with_reversal(self, transaction_id: int, author: Optional[str] = None,
                                         tenant_id: Optional[str] = None) -> Optional[DeletionOutcome]:
        db_transaction = self.gateway.get_transaction(transaction_id, tenant_id)
        if db_transaction is None:
            return None
        reversal = self._reverse_for_record(
            "transaction", transaction_id, db_transaction.tenant_id, "Transaction deleted", author
        )
        self.gateway.delete_transaction(db_transaction, author)
        return DeletionOutcome(record_id=transaction_id, reversal=reversal)

    def delete_expense_with_reversal(self, expense_id: int, author: Optional[str] = None,
                                     tenant_id: Optional[str] = None) -> Optional[DeletionOutcome]:
        db_expense = self.gateway.get_expense(expense_id, tenant_id)
        if db_expense is None:
            return None
        reversal = self._reverse_for_record(
            "expense", expense_id, db_expense.tenant_id, "Expense deleted", author
        )
        self.gateway.delete_expense(db_expense, author)
        return DeletionOutcome(record_id=expense_id, reversal=reversal)

    def _reverse_for_record(self, kind, record_id, tenant_id, reason, author):
        entry = self.gateway.find_entry_by_reference(str(record_id), tenant_id)
        if entry is None:
            logger.warning(f"No journal entry found for {kind} {record_id}; deleting without reversal")
            return None
        reversal = self.reverse(entry.id, reason, author, tenant_id)
        if reversal is None:
            logger.error(f"Reversal of {entry.entry_number} failed; {kind} {record_id} is deleted anyway")
        return reversal


def payment_reference(invoice_number: str) -> str:
    return f"{invoice_number}-PAYMENT"


def validate_posting_input(amount, text: Optional[str], field_name: str = "description") -> Decimal:
    """Raise ValueError for an amount or text that no posting accepts."""
    _require_text(text, field_name)
    return _require_positive(amount)


def _require_positive(amount) -> Decimal:
    value = to_money(amount)
    if value <= 0:
        raise ValueError(f"Amount must be positive, got {amount!r}")
    return value


def _require_text(value: Optional[str], field_name: str):
    if not value or not str(value).strip():
        raise ValueError(f"{field_name} must not be empty")
