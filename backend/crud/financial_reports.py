from sqlalchemy.orm import Session
from sqlalchemy import func
from models import chart_of_accounts, journal_entry, journal_line
from schemas.reports import TrialBalance, TrialBalanceRow
from datetime import date
from decimal import Decimal

def get_trial_balance(db: Session, as_of_date: date, tenant_id: str) -> TrialBalance:
    """
    Trial balance from posted journal lines dated on or before `as_of_date`.

    Each account shows its net balance on the side it falls, so the report
    balances whenever every posted entry does.
    """
    account_totals = db.query(
        chart_of_accounts.ChartOfAccounts.account_code,
        chart_of_accounts.ChartOfAccounts.account_name,
        chart_of_accounts.ChartOfAccounts.account_type,
        func.coalesce(func.sum(journal_line.JournalLine.debit), 0),
        func.coalesce(func.sum(journal_line.JournalLine.credit), 0),
    ).join(
        journal_line.JournalLine, journal_line.JournalLine.account_id == chart_of_accounts.ChartOfAccounts.id
    ).join(
        journal_entry.JournalEntry, journal_entry.JournalEntry.id == journal_line.JournalLine.journal_entry_id
    ).filter(
        journal_entry.JournalEntry.tenant_id == tenant_id,
        journal_entry.JournalEntry.date <= as_of_date,
        journal_entry.JournalEntry.status == journal_entry.JOURNAL_ENTRY_STATUS_POSTED,
    ).group_by(
        chart_of_accounts.ChartOfAccounts.id,
        chart_of_accounts.ChartOfAccounts.account_code,
        chart_of_accounts.ChartOfAccounts.account_name,
        chart_of_accounts.ChartOfAccounts.account_type,
    ).order_by(chart_of_accounts.ChartOfAccounts.account_code).all()

    rows = []
    total_debit = Decimal(0)
    total_credit = Decimal(0)
    for code, name, account_type, debit, credit in account_totals:
        balance = (Decimal(str(debit)) - Decimal(str(credit))).quantize(Decimal("0.01"))
        if balance == 0:
            continue
        row = TrialBalanceRow(
            account_code=code,
            account_name=name,
            account_type=account_type,
            debit=balance if balance > 0 else Decimal(0),
            credit=-balance if balance < 0 else Decimal(0),
        )
        total_debit += row.debit
        total_credit += row.credit
        rows.append(row)

    return TrialBalance(
        as_of=as_of_date,
        rows=rows,
        total_debit=total_debit,
        total_credit=total_credit,
        is_balanced=abs(total_debit - total_credit) <= Decimal("0.01"),
    )
