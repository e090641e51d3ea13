from decimal import Decimal

import pytest

from aqua_erp.common.exceptions import (
    CreditNotFound,
    InactiveRecord,
    InsufficientFunds,
    InvalidAmount,
    InvalidBankAccount,
)
from aqua_erp.models import (
    BankTransaction,
    BuyCreditTransaction,
    CashTransaction,
    CreditStatus,
    RepaymentMethod,
    SalesCreditTransaction,
)
from aqua_erp.services.credit_service import CreditKind, CreditService
from aqua_erp.services.ledger_service import LedgerService
from conftest import make_bank, make_buy_credit, make_customer, make_sales_credit, money, seed_cash


@pytest.fixture
def sales_credit(db):
    seed_cash(db, "5000.00")
    return make_sales_credit(db, make_customer(db), total="1000.00")


class TestSalesCreditRepayment:

    def test_partial_cash_repayment(self, db, sales_credit):
        result = CreditService(db).repay(
            CreditKind.SALES, sales_credit.id, Decimal("400.00"), RepaymentMethod.CASH
        )

        assert result["outstanding_balance"] == Decimal("600.00")
        assert result["status"] == CreditStatus.ACCEPTED
        assert result["is_active"] is True
        assert result["ledger_balance"] == Decimal("5400.00")

        db.refresh(sales_credit)
        assert sales_credit.total_money == Decimal("600.00")

        cash_txn = (db.query(CashTransaction)
                    .filter(CashTransaction.transaction_id == sales_credit.transaction_id)
                    .one())
        assert cash_txn.money_in == Decimal("400.00")
        assert cash_txn.balance == Decimal("5400.00")

        repayment = db.query(SalesCreditTransaction).one()
        assert repayment.amount_payed == Decimal("400.00")
        assert repayment.outstanding_balance == Decimal("600.00")
        assert repayment.cash_transaction_id == cash_txn.id
        assert repayment.bank_transaction_id is None

    def test_full_repayment_closes_the_credit(self, db, sales_credit):
        service = CreditService(db)
        service.repay(CreditKind.SALES, sales_credit.id, Decimal("400.00"), RepaymentMethod.CASH)
        result = service.repay(CreditKind.SALES, sales_credit.id, Decimal("600.00"), RepaymentMethod.CASH)

        assert result["outstanding_balance"] == Decimal("0.00")
        assert result["status"] == CreditStatus.PAID
        assert result["is_active"] is False

        db.refresh(sales_credit)
        assert sales_credit.status == CreditStatus.PAID
        assert sales_credit.is_active is False
        assert LedgerService(db).get_cash_balance() == Decimal("6000.00")
        assert db.query(SalesCreditTransaction).count() == 2

    def test_repaying_a_settled_credit_is_rejected(self, db, sales_credit):
        service = CreditService(db)
        service.repay(CreditKind.SALES, sales_credit.id, Decimal("1000.00"), RepaymentMethod.CASH)

        with pytest.raises(InactiveRecord):
            service.repay(CreditKind.SALES, sales_credit.id, Decimal("1.00"), RepaymentMethod.CASH)

    def test_overpayment_leaves_everything_unchanged(self, db, sales_credit):
        with pytest.raises(InvalidAmount):
            CreditService(db).repay(
                CreditKind.SALES, sales_credit.id, Decimal("1000.01"), RepaymentMethod.CASH
            )

        db.refresh(sales_credit)
        assert sales_credit.total_money == Decimal("1000.00")
        assert sales_credit.status == CreditStatus.ACCEPTED
        assert LedgerService(db).get_cash_balance() == Decimal("5000.00")
        assert db.query(SalesCreditTransaction).count() == 0
        assert db.query(CashTransaction).count() == 1

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5.00")])
    def test_non_positive_amount_is_rejected(self, db, sales_credit, amount):
        with pytest.raises(InvalidAmount):
            CreditService(db).repay(CreditKind.SALES, sales_credit.id, amount, RepaymentMethod.CASH)

    def test_unknown_credit(self, db):
        with pytest.raises(CreditNotFound):
            CreditService(db).repay(CreditKind.SALES, 404, Decimal("1.00"), RepaymentMethod.CASH)

    def test_bank_repayment_moves_bank_balance(self, db, sales_credit):
        bank = make_bank(db, "2000.00")

        result = CreditService(db).repay(
            CreditKind.SALES, sales_credit.id, Decimal("250.00"), RepaymentMethod.BANK,
            bank_id=bank.id, image="uploads/receipts/r1.jpg",
        )

        assert result["ledger_balance"] == Decimal("2250.00")
        assert LedgerService(db).get_bank_balance(bank.id) == Decimal("2250.00")
        assert LedgerService(db).get_cash_balance() == Decimal("5000.00")

        repayment = db.query(SalesCreditTransaction).one()
        bank_txn = db.query(BankTransaction).filter(BankTransaction.id == repayment.bank_transaction_id).one()
        assert bank_txn.money_in == Decimal("250.00")
        assert bank_txn.receipt_image == "uploads/receipts/r1.jpg"

    def test_bank_repayment_to_inactive_account_rolls_back(self, db, sales_credit):
        with pytest.raises(InvalidBankAccount):
            CreditService(db).repay(
                CreditKind.SALES, sales_credit.id, Decimal("100.00"), RepaymentMethod.BANK, bank_id=77
            )

        db.refresh(sales_credit)
        assert sales_credit.total_money == Decimal("1000.00")
        assert db.query(SalesCreditTransaction).count() == 0


class TestBuyCreditRepayment:

    def test_buy_repayment_takes_money_out(self, db):
        seed_cash(db, "1000.00")
        credit = make_buy_credit(db, total="800.00")

        result = CreditService(db).repay(CreditKind.BUY, credit.id, Decimal("300.00"), RepaymentMethod.CASH)

        assert result["outstanding_balance"] == Decimal("500.00")
        assert result["ledger_balance"] == Decimal("700.00")
        cash_txn = db.query(CashTransaction).filter(
            CashTransaction.transaction_id == credit.transaction_id
        ).one()
        assert cash_txn.money_out == Decimal("300.00")
        assert db.query(BuyCreditTransaction).count() == 1

    def test_buy_repayment_without_funds_is_rejected(self, db):
        seed_cash(db, "100.00")
        credit = make_buy_credit(db, total="800.00")

        with pytest.raises(InsufficientFunds):
            CreditService(db).repay(CreditKind.BUY, credit.id, Decimal("300.00"), RepaymentMethod.CASH)

        db.refresh(credit)
        assert credit.total_money == Decimal("800.00")
        assert db.query(BuyCreditTransaction).count() == 0
        assert LedgerService(db).get_cash_balance() == Decimal("100.00")


class TestRepaymentApi:

    def test_sales_repay_endpoint(self, client, db, admin_headers, sales_credit):
        response = client.post(
            "/api/admin/sales-credit-repay",
            json={"credit_id": sales_credit.id, "amount_payed": 400, "payment_method": "CASH"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert money(body["outstanding_balance"]) == Decimal("600.00")
        assert money(body["ledger_balance"]) == Decimal("5400.00")
        assert body["credit_status"] == "ACCEPTED"

    def test_cashier_can_take_sales_repayments(self, client, db, cashier_headers, sales_credit):
        response = client.post(
            "/api/cashier/sales-credit-repay",
            json={"credit_id": sales_credit.id, "amount_payed": 1000, "payment_method": "CASH"},
            headers=cashier_headers,
        )

        assert response.status_code == 201
        assert response.json()["is_active"] is False

    def test_cashier_cannot_use_admin_routes(self, client, cashier_headers, sales_credit):
        response = client.post(
            "/api/admin/sales-credit-repay",
            json={"credit_id": sales_credit.id, "amount_payed": 10, "payment_method": "CASH"},
            headers=cashier_headers,
        )

        assert response.status_code == 403
        assert response.json()["success"] is False

    def test_overpayment_returns_error_body(self, client, admin_headers, sales_credit):
        response = client.post(
            "/api/admin/sales-credit-repay",
            json={"credit_id": sales_credit.id, "amount_payed": 5000, "payment_method": "CASH"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["status_code"] == 400
        assert "exceeds" in body["message"]

    def test_bank_repayment_needs_receipt(self, client, db, admin_headers, sales_credit):
        bank = make_bank(db, "100.00")

        response = client.post(
            "/api/admin/sales-credit-repay",
            json={"credit_id": sales_credit.id, "amount_payed": 50,
                  "payment_method": "BANK", "bank_id": bank.id},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert "Receipt image" in response.json()["message"]

    def test_settled_credit_returns_409(self, client, db, admin_headers, sales_credit):
        payload = {"credit_id": sales_credit.id, "amount_payed": 1000, "payment_method": "CASH"}
        assert client.post("/api/admin/sales-credit-repay", json=payload, headers=admin_headers).status_code == 201

        payload["amount_payed"] = 1
        response = client.post("/api/admin/sales-credit-repay", json=payload, headers=admin_headers)
        assert response.status_code == 409

    def test_repayment_history_and_credit_list(self, client, db, admin_headers, sales_credit):
        client.post(
            "/api/admin/sales-credit-repay",
            json={"credit_id": sales_credit.id, "amount_payed": 150.5, "payment_method": "CASH"},
            headers=admin_headers,
        )

        history = client.get(f"/api/admin/sales-credit/{sales_credit.id}/repayments", headers=admin_headers)
        assert history.status_code == 200
        body = history.json()
        assert money(body["outstanding_balance"]) == Decimal("849.50")
        assert len(body["repayments"]) == 1

        listing = client.get("/api/admin/sales-credit", headers=admin_headers).json()
        assert listing["credits"][0]["counterparty_name"] == "Ali Traders"
        assert money(listing["total_outstanding"]) == Decimal("849.50")

    def test_unknown_credit_returns_404(self, client, admin_headers):
        response = client.get("/api/admin/buy-credit/9/repayments", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Buy credit 9 not found"

    def test_buy_credit_list_totals_skip_settled_records(self, client, db, admin_headers):
        make_buy_credit(db, total="800.00", transaction_id="TRANS-2024-1-1-000010")
        overdue = make_buy_credit(db, total="200.00", transaction_id="TRANS-2024-1-1-000011")
        settled = make_buy_credit(db, total="0.00", transaction_id="TRANS-2024-1-1-000012")
        overdue.status = CreditStatus.OVERDUE
        settled.status = CreditStatus.PAID
        settled.is_active = False
        db.commit()

        listing = client.get("/api/admin/buy-credit", headers=admin_headers).json()

        assert len(listing["credits"]) == 3
        assert money(listing["total_outstanding"]) == Decimal("1000.00")
        assert listing["overdue_count"] == 1
