from datetime import date
from decimal import Decimal

from crud.financial_reports import get_trial_balance
from models.chart_of_accounts import AccountCode

from conftest import TENANT


def rows_by_code(report):
    return {row.account_code: row for row in report.rows}


class TestTrialBalance:
    def test_empty_ledger(self, seeded_db):
        report = get_trial_balance(seeded_db, date(2025, 12, 31), TENANT)

        assert report.rows == []
        assert report.total_debit == Decimal("0")
        assert report.is_balanced

    def test_postings_net_per_account(self, ledger, seeded_db):
        ledger.post_income(TENANT, "1000.00", "Opening sale", date(2025, 1, 5))
        ledger.post_expense(TENANT, "300.00", "January rent", "rent", date(2025, 1, 6))
        ledger.post_invoice_issued(TENANT, "500.00", "INV-1", "Globex", date(2025, 1, 7))
        ledger.post_payment_received(TENANT, "200.00", "INV-1", "Globex", date(2025, 1, 8))

        report = get_trial_balance(seeded_db, date(2025, 1, 31), TENANT)
        rows = rows_by_code(report)

        assert rows[AccountCode.CASH].debit == Decimal("700.00")
        assert rows[AccountCode.BANK].debit == Decimal("200.00")
        assert rows[AccountCode.ACCOUNTS_RECEIVABLE].debit == Decimal("300.00")
        assert rows[AccountCode.RENT_EXPENSE].debit == Decimal("300.00")
        assert rows[AccountCode.OTHER_INCOME].credit == Decimal("1000.00")
        assert rows[AccountCode.SALES_REVENUE].credit == Decimal("500.00")
        assert report.total_debit == report.total_credit == Decimal("1500.00")
        assert report.is_balanced

    def test_as_of_date_excludes_later_entries(self, ledger, seeded_db):
        ledger.post_income(TENANT, 100, "January", date(2025, 1, 15))
        ledger.post_income(TENANT, 50, "February", date(2025, 2, 15))

        report = get_trial_balance(seeded_db, date(2025, 1, 31), TENANT)

        assert rows_by_code(report)[AccountCode.CASH].debit == Decimal("100.00")

    def test_reversal_cancels_in_original_period(self, ledger, seeded_db):
        entry = ledger.post_expense(TENANT, 80, "Power", "luz", date(2025, 3, 10))
        ledger.reverse(entry.id, "Duplicate")

        report = get_trial_balance(seeded_db, date(2025, 3, 31), TENANT)

        assert report.rows == []
        assert report.is_balanced

    def test_other_tenant_is_excluded(self, ledger, seeded_db):
        ledger.post_income(TENANT, 100, "Sale", date(2025, 1, 15))

        assert get_trial_balance(seeded_db, date(2025, 12, 31), "globex").rows == []
