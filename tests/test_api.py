"""
API tests for the ledger endpoints

Each request carries the tenant and acting user headers the upstream
gateway would forward.
"""

from decimal import Decimal

from utils.timezone import now_local

from conftest import HEADERS, TENANT


def post_manual_entry(client, lines, **overrides):
    payload = {"date": "2025-02-01", "description": "Owner top-up", "lines": lines}
    payload.update(overrides)
    return client.post("/journal-entries/", json=payload, headers=HEADERS)


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "Ledger Posting API is running"}


class TestTenantHeader:
    def test_missing_tenant_header_is_rejected(self, client):
        assert client.get("/journal-entries/").status_code == 422

    def test_entries_are_isolated_per_tenant(self, client):
        client.post("/journal-entries/invoice-issued", headers=HEADERS, json={
            "invoice_number": "INV-1", "customer_name": "Globex", "amount": "10.00", "date": "2025-01-01",
        })

        response = client.get("/journal-entries/", headers={"X-Tenant-ID": "globex"})

        assert response.status_code == 200
        assert response.json() == []


class TestChartOfAccountsApi:
    def test_list_seeded_accounts(self, client):
        response = client.get("/chart-of-accounts/", headers=HEADERS)

        assert response.status_code == 200
        codes = [account["account_code"] for account in response.json()]
        assert codes == sorted(codes)
        assert "1000" in codes and "5900" in codes

    def test_seed_defaults_for_new_tenant(self, client):
        headers = {"X-Tenant-ID": "globex"}

        first = client.post("/chart-of-accounts/seed-defaults", headers=headers)
        second = client.post("/chart-of-accounts/seed-defaults", headers=headers)

        assert first.status_code == 201
        assert len(first.json()) == 11
        assert second.json() == []

    def test_duplicate_code_is_rejected(self, client):
        response = client.post("/chart-of-accounts/", headers=HEADERS, json={
            "account_code": "1000", "account_name": "Another Cash", "account_type": "Asset",
        })
        assert response.status_code == 400

    def test_account_in_use_cannot_be_deleted(self, client):
        client.post("/transactions/", headers=HEADERS, json={
            "type": "income", "description": "Sale", "amount": "25.00", "date": "2025-01-02",
        })
        cash = next(a for a in client.get("/chart-of-accounts/", headers=HEADERS).json() if a["account_code"] == "1000")

        response = client.delete(f"/chart-of-accounts/{cash['id']}", headers=HEADERS)

        assert response.status_code == 400


class TestJournalEntriesApi:
    def test_manual_entry(self, client):
        response = post_manual_entry(client, [
            {"account_code": "1100", "debit": "250.00"},
            {"account_code": "4900", "credit": "250.00", "description": "Capital"},
        ], reference="TOPUP-1")

        assert response.status_code == 201
        body = response.json()
        assert body["entry_number"] == f"JE-{now_local().year}-000001"
        assert body["tenant_id"] == TENANT
        assert body["created_by"] == "alice"
        assert body["status"] == "POSTED"
        assert [line["line_number"] for line in body["lines"]] == [1, 2]
        assert body["lines"][0]["description"] == "Owner top-up"
        assert body["lines"][1]["description"] == "Capital"
        assert Decimal(body["lines"][0]["debit"]) == Decimal("250")

    def test_unbalanced_entry_is_rejected_by_validation(self, client):
        response = post_manual_entry(client, [
            {"account_code": "1100", "debit": "250.00"},
            {"account_code": "4900", "credit": "200.00"},
        ])
        assert response.status_code == 422
        assert client.get("/journal-entries/", headers=HEADERS).json() == []

    def test_two_sided_line_is_rejected(self, client):
        response = post_manual_entry(client, [
            {"account_code": "1100", "debit": "10.00", "credit": "10.00"},
            {"account_code": "4900", "credit": "0.00", "debit": "0.00"},
        ])
        assert response.status_code == 422

    def test_unknown_account_is_rejected(self, client):
        response = post_manual_entry(client, [
            {"account_code": "9999", "debit": "10.00"},
            {"account_code": "4900", "credit": "10.00"},
        ])
        assert response.status_code == 422
        assert "could not be posted" in response.json()["detail"]

    def test_invoice_then_payment_lookup(self, client):
        invoice = {"invoice_number": "INV-9", "customer_name": "Globex", "amount": "400.00", "date": "2025-03-01"}

        issued = client.post("/journal-entries/invoice-issued", json=invoice, headers=HEADERS)
        paid = client.post("/journal-entries/payment-received", json={**invoice, "date": "2025-03-20"}, headers=HEADERS)

        assert issued.status_code == paid.status_code == 201
        assert client.get("/journal-entries/by-reference/INV-9", headers=HEADERS).json()["id"] == issued.json()["id"]
        assert client.get("/journal-entries/by-reference/INV-9-PAYMENT", headers=HEADERS).json()["id"] == paid.json()["id"]
        assert client.get("/journal-entries/by-reference/INV-404", headers=HEADERS).status_code == 404

    def test_reverse(self, client):
        original = post_manual_entry(client, [
            {"account_code": "1100", "debit": "60.00"},
            {"account_code": "4900", "credit": "60.00"},
        ]).json()

        response = client.post(f"/journal-entries/{original['id']}/reverse", json={"reason": "Typo"}, headers=HEADERS)

        assert response.status_code == 201
        reversal = response.json()
        assert reversal["reference"] == f"REV-{original['entry_number']}"
        assert reversal["date"] == original["date"]
        assert Decimal(reversal["lines"][0]["credit"]) == Decimal("60")
        assert Decimal(reversal["lines"][1]["debit"]) == Decimal("60")

    def test_reverse_missing_entry(self, client):
        response = client.post("/journal-entries/999/reverse", json={"reason": "Typo"}, headers=HEADERS)
        assert response.status_code == 404

    def test_get_missing_entry(self, client):
        assert client.get("/journal-entries/999", headers=HEADERS).status_code == 404

    def test_blank_invoice_number_is_rejected(self, client):
        response = client.post("/journal-entries/invoice-issued", headers=HEADERS, json={
            "invoice_number": " ", "customer_name": "Globex", "amount": "10.00", "date": "2025-01-01",
        })

        assert response.status_code == 422
        assert client.get("/journal-entries/", headers=HEADERS).json() == []

    def test_blank_customer_on_payment_is_rejected(self, client):
        response = client.post("/journal-entries/payment-received", headers=HEADERS, json={
            "invoice_number": "INV-1", "customer_name": "   ", "amount": "10.00", "date": "2025-01-01",
        })
        assert response.status_code == 422

    def test_blank_reversal_reason_is_rejected(self, client):
        original = post_manual_entry(client, [
            {"account_code": "1100", "debit": "5.00"},
            {"account_code": "4900", "credit": "5.00"},
        ]).json()

        response = client.post(f"/journal-entries/{original['id']}/reverse", json={"reason": "  "}, headers=HEADERS)

        assert response.status_code == 422
        assert len(client.get("/journal-entries/", headers=HEADERS).json()) == 1


class TestTransactionsApi:
    def test_income_transaction_posts_entry(self, client):
        response = client.post("/transactions/", headers=HEADERS, json={
            "type": "income", "description": "Workshop fee", "amount": "150.00", "date": "2025-04-01",
        })

        assert response.status_code == 201
        transaction = response.json()
        assert transaction["type"] == "INCOME"
        assert transaction["category"] == "General Income"

        entry = client.get(f"/journal-entries/by-reference/{transaction['id']}", headers=HEADERS).json()
        assert entry["description"] == "Income: Workshop fee"
        assert entry["created_by"] == "alice"

    def test_invalid_type(self, client):
        response = client.post("/transactions/", headers=HEADERS, json={
            "type": "gift", "amount": "1.00", "date": "2025-04-01",
        })
        assert response.status_code == 422

    def test_delete_reverses_entry(self, client):
        transaction = client.post("/transactions/", headers=HEADERS, json={
            "type": "expense", "category": "Salarios", "description": "March payroll", "amount": "900.00", "date": "2025-03-31",
        }).json()

        response = client.delete(f"/transactions/{transaction['id']}", headers=HEADERS)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == transaction["id"]
        assert body["deleted"] is True
        assert body["reversal_entry_number"] == f"JE-{now_local().year}-000002"
        assert client.get(f"/transactions/{transaction['id']}", headers=HEADERS).status_code == 404
        assert len(client.get("/journal-entries/", headers=HEADERS).json()) == 2

    def test_delete_transfer_without_entry(self, client):
        transaction = client.post("/transactions/", headers=HEADERS, json={
            "type": "transfer", "description": "Move to savings", "amount": "5.00", "date": "2025-03-31",
        }).json()

        body = client.delete(f"/transactions/{transaction['id']}", headers=HEADERS).json()

        assert body["deleted"] is True
        assert body["reversal_entry_id"] is None

    def test_delete_missing_transaction(self, client):
        assert client.delete("/transactions/999", headers=HEADERS).status_code == 404

    def test_blank_description_falls_back_to_category(self, client):
        response = client.post("/transactions/", headers=HEADERS, json={
            "type": "expense", "category": "Rent", "description": "   ", "amount": "40.00", "date": "2025-04-01",
        })

        assert response.status_code == 201
        transaction = response.json()
        assert transaction["description"] is None
        entry = client.get(f"/journal-entries/by-reference/{transaction['id']}", headers=HEADERS).json()
        assert entry["description"] == "Expense: Rent"

    def test_blank_description_and_category_use_default_category(self, client):
        response = client.post("/transactions/", headers=HEADERS, json={
            "type": "income", "category": " ", "description": " ", "amount": "40.00", "date": "2025-04-01",
        })

        assert response.status_code == 201
        assert response.json()["category"] == "General Income"
        entry = client.get(f"/journal-entries/by-reference/{response.json()['id']}", headers=HEADERS).json()
        assert entry["description"] == "Income: General Income"


class TestExpensesApi:
    def test_create_and_delete(self, client):
        created = client.post("/expenses/", headers=HEADERS, json={
            "date": "2025-05-01", "description": "May rent", "category": "Alquiler", "amount": "1200.00",
        })
        assert created.status_code == 201
        expense = created.json()

        entry = client.get(f"/journal-entries/by-reference/{expense['id']}", headers=HEADERS).json()
        assert entry["description"] == "Expense: May rent"

        deleted = client.delete(f"/expenses/{expense['id']}", headers=HEADERS).json()
        assert deleted["reversal_entry_id"] is not None
        assert client.get(f"/expenses/{expense['id']}", headers=HEADERS).status_code == 404
        assert client.get("/expenses/", headers=HEADERS).json() == []

    def test_blank_description_saves_nothing(self, client):
        response = client.post("/expenses/", headers=HEADERS, json={
            "date": "2025-05-01", "description": "   ", "category": "Rent", "amount": "10.00",
        })

        assert response.status_code == 422
        assert client.get("/expenses/", headers=HEADERS).json() == []
        assert client.get("/journal-entries/", headers=HEADERS).json() == []

    def test_description_is_stripped(self, client):
        expense = client.post("/expenses/", headers=HEADERS, json={
            "date": "2025-05-01", "description": "  Printer paper ", "amount": "10.00",
        }).json()

        assert expense["description"] == "Printer paper"
        entry = client.get(f"/journal-entries/by-reference/{expense['id']}", headers=HEADERS).json()
        assert entry["description"] == "Expense: Printer paper"


class TestTrialBalanceApi:
    def test_trial_balance_balances(self, client):
        client.post("/transactions/", headers=HEADERS, json={
            "type": "income", "description": "Sale", "amount": "80.00", "date": "2025-01-10",
        })
        client.post("/expenses/", headers=HEADERS, json={
            "date": "2025-01-11", "description": "Power bill", "category": "luz", "amount": "30.00",
        })

        response = client.get("/reports/trial-balance", params={"as_of": "2025-01-31"}, headers=HEADERS)

        assert response.status_code == 200
        report = response.json()
        assert report["is_balanced"] is True
        assert Decimal(report["total_debit"]) == Decimal("80")
        balances = {row["account_code"]: row for row in report["rows"]}
        assert Decimal(balances["1000"]["debit"]) == Decimal("50")
        assert Decimal(balances["5300"]["debit"]) == Decimal("30")
