"""
Ledger Movement Service
Every change to the cash drawer or to a bank account balance goes through
`LedgerService.apply_movement`, which updates the running balance and appends
the matching audit row in the caller's database transaction.

Example:
- Cash balance 5,000
- apply_movement(+400, "TRANS-...")     → balance 5,400, cash txn in=400
- apply_movement(-6,000, "TRANS-...")   → InsufficientFunds, nothing written
"""

from decimal import Decimal
from typing import Optional, Tuple, Union

from sqlalchemy.orm import Session

from aqua_erp.common.exceptions import InsufficientFunds, InvalidAmount, InvalidBankAccount
from aqua_erp.logger_config import logger
from aqua_erp.models.ledger import (
    BankAccount,
    BankBalance,
    BankTransaction,
    CashBalance,
    CashTransaction,
)

TWO_PLACES = Decimal("0.01")


def to_money(value) -> Decimal:
    """Normalise ints/floats/strings to a 2-place Decimal."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(TWO_PLACES)


class LedgerService:
    """Atomic balance + audit-row updates for the cash ledger and bank ledgers.

    `bank_id=None` addresses the single cash ledger. Nothing here commits:
    the calling service owns the transaction and decides to commit or roll back.
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== BALANCE LOOKUPS ====================

    def get_active_bank_account(self, bank_id: int) -> BankAccount:
        account = self.db.query(BankAccount).filter(
            BankAccount.id == bank_id,
            BankAccount.is_active.is_(True)
        ).first()
        if not account:
            raise InvalidBankAccount(f"Bank account {bank_id} not found or inactive")
        return account

    def get_cash_balance(self) -> Decimal:
        row = self.db.query(CashBalance).filter(
            CashBalance.is_active.is_(True)
        ).order_by(CashBalance.id.asc()).first()
        return to_money(row.balance) if row else Decimal("0.00")

    def get_bank_balance(self, bank_id: int) -> Decimal:
        self.get_active_bank_account(bank_id)
        row = self.db.query(BankBalance).filter(
            BankBalance.bank_id == bank_id,
            BankBalance.is_active.is_(True)
        ).order_by(BankBalance.id.asc()).first()
        return to_money(row.balance) if row else Decimal("0.00")

    def _lock_cash_balance(self) -> CashBalance:
        row = (self.db.query(CashBalance)
               .filter(CashBalance.is_active.is_(True))
               .order_by(CashBalance.id.asc())
               .with_for_update()
               .first())
        if not row:
            logger.info("No cash balance found, opening cash ledger at 0")
            row = CashBalance(balance=Decimal("0.00"), is_active=True)
            self.db.add(row)
            self.db.flush()
        return row

    def _lock_bank_balance(self, bank_id: int) -> BankBalance:
        self.get_active_bank_account(bank_id)
        row = (self.db.query(BankBalance)
               .filter(BankBalance.bank_id == bank_id, BankBalance.is_active.is_(True))
               .order_by(BankBalance.id.asc())
               .with_for_update()
               .first())
        if not row:
            logger.info(f"No balance found for bank {bank_id}, opening at 0")
            row = BankBalance(bank_id=bank_id, balance=Decimal("0.00"), is_active=True)
            self.db.add(row)
            self.db.flush()
        return row

    # ==================== MOVEMENT ====================

    def apply_movement(
        self,
        amount: Union[Decimal, int, float, str],
        transaction_id: str,
        bank_id: Optional[int] = None,
        user_id: Optional[int] = None,
        description: Optional[str] = None,
        receipt_image: Optional[str] = None,
    ) -> Tuple[Union[CashBalance, BankBalance], Union[CashTransaction, BankTransaction]]:
        """
        Apply a signed movement to one ledger.

        Positive amounts are money in, negative amounts money out. The balance
        row is locked for the rest of the transaction. Raises InsufficientFunds
        if the balance would go below zero.
        """
        amount = to_money(amount)
        if amount == 0:
            raise InvalidAmount("Ledger movement amount must be non-zero")

        if bank_id is None:
            balance_row = self._lock_cash_balance()
            ledger_name = "cash"
        else:
            balance_row = self._lock_bank_balance(bank_id)
            ledger_name = f"bank {bank_id}"

        current = to_money(balance_row.balance)
        new_balance = current + amount

        if new_balance < 0:
            raise InsufficientFunds(
                f"Insufficient {ledger_name} balance. Available: {current}, Requested: {-amount}"
            )

        balance_row.balance = new_balance

        money_in = amount if amount > 0 else Decimal("0.00")
        money_out = -amount if amount < 0 else Decimal("0.00")

        if bank_id is None:
            txn = CashTransaction(
                transaction_id=transaction_id,
                money_in=money_in,
                money_out=money_out,
                balance=new_balance,
                description=description,
                user_id=user_id,
            )
        else:
            txn = BankTransaction(
                bank_id=bank_id,
                transaction_id=transaction_id,
                money_in=money_in,
                money_out=money_out,
                balance=new_balance,
                description=description,
                receipt_image=receipt_image,
                user_id=user_id,
            )

        self.db.add(txn)
        self.db.flush()

        logger.info(
            f"Ledger movement on {ledger_name}: {amount:+} "
            f"({current} -> {new_balance}) ref={transaction_id}"
        )
        return balance_row, txn
