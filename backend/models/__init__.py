from models.chart_of_accounts import ChartOfAccounts
from models.journal_entry import JournalEntry
from models.journal_line import JournalLine
from models.transactions import Transaction
from models.expenses import Expense
from models.audit_log import AuditLog

__all__ = ['AuditLog', 'ChartOfAccounts', 'Expense', 'JournalEntry', 'JournalLine', 'Transaction',]
