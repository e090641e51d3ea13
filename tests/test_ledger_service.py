from decimal import Decimal

import pytest

from aqua_erp.common.exceptions import InsufficientFunds, InvalidAmount, InvalidBankAccount
from aqua_erp.models import BankTransaction, CashBalance, CashTransaction
from aqua_erp.services.ledger_service import LedgerService, to_money
from conftest import make_bank, seed_cash


def test_to_money_quantizes_to_two_places():
    assert to_money(10) == Decimal("10.00")
    assert to_money("12.345") == Decimal("12.34")
    assert str(to_money(Decimal("7.5"))) == "7.50"


def test_first_cash_movement_opens_the_cash_ledger(db):
    ledger = LedgerService(db)
    assert ledger.get_cash_balance() == Decimal("0.00")

    balance_row, txn = ledger.apply_movement(Decimal("250.00"), transaction_id="TRANS-1")
    db.commit()

    assert balance_row.balance == Decimal("250.00")
    assert txn.money_in == Decimal("250.00")
    assert txn.money_out == Decimal("0.00")
    assert txn.balance == Decimal("250.00")
    assert db.query(CashBalance).count() == 1


def test_outflow_records_money_out_and_snapshot(db):
    seed_cash(db, "1000.00")
    ledger = LedgerService(db)

    _, txn = ledger.apply_movement(Decimal("-300.00"), transaction_id="TRANS-2")
    db.commit()

    assert txn.money_out == Decimal("300.00")
    assert txn.money_in == Decimal("0.00")
    assert txn.balance == Decimal("700.00")
    assert ledger.get_cash_balance() == Decimal("700.00")


def test_outflow_beyond_balance_is_rejected(db):
    seed_cash(db, "100.00")
    ledger = LedgerService(db)

    with pytest.raises(InsufficientFunds):
        ledger.apply_movement(Decimal("-100.01"), transaction_id="TRANS-3")
    db.rollback()

    assert ledger.get_cash_balance() == Decimal("100.00")
    assert db.query(CashTransaction).count() == 1


def test_zero_movement_is_rejected(db):
    with pytest.raises(InvalidAmount):
        LedgerService(db).apply_movement(0, transaction_id="TRANS-4")


def test_bank_movement_requires_active_account(db):
    ledger = LedgerService(db)
    with pytest.raises(InvalidBankAccount):
        ledger.apply_movement(Decimal("10.00"), transaction_id="TRANS-5", bank_id=999)


def test_balance_equals_sum_of_bank_transactions(db):
    bank = make_bank(db, "500.00")
    ledger = LedgerService(db)

    ledger.apply_movement(Decimal("200.00"), transaction_id="T-A", bank_id=bank.id)
    ledger.apply_movement(Decimal("-150.00"), transaction_id="T-B", bank_id=bank.id)
    db.commit()

    txns = db.query(BankTransaction).filter(BankTransaction.bank_id == bank.id).all()
    signed_total = sum((t.money_in - t.money_out for t in txns), Decimal("0.00"))

    assert ledger.get_bank_balance(bank.id) == Decimal("550.00")
    assert signed_total == Decimal("550.00")
    assert len(txns) == 3
