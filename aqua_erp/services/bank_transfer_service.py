from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from aqua_erp.common.exceptions import AppError, InvalidAmount
from aqua_erp.logger_config import logger
from aqua_erp.models.ledger import BankTransaction
from aqua_erp.services.ledger_service import LedgerService, to_money
from aqua_erp.utils.transaction_id import generate_bank_transaction_id


class BankTransferService:
    """Manual deposits into and withdrawals from a bank account."""

    def __init__(self, db: Session):
        self.db = db
        self.ledger = LedgerService(db)

    def deposit(
        self,
        bank_id: int,
        amount: Decimal,
        user_id: Optional[int] = None,
        description: Optional[str] = None,
        receipt_image: Optional[str] = None,
    ) -> BankTransaction:
        return self._transfer(bank_id, to_money(amount), user_id, description, receipt_image)

    def withdraw(
        self,
        bank_id: int,
        amount: Decimal,
        user_id: Optional[int] = None,
        description: Optional[str] = None,
        receipt_image: Optional[str] = None,
    ) -> BankTransaction:
        return self._transfer(bank_id, -to_money(amount), user_id, description, receipt_image)

    def _transfer(
        self,
        bank_id: int,
        signed_amount: Decimal,
        user_id: Optional[int],
        description: Optional[str],
        receipt_image: Optional[str],
    ) -> BankTransaction:
        if signed_amount == 0:
            raise InvalidAmount("Amount must be positive")

        kind = "deposit" if signed_amount > 0 else "withdrawal"
        logger.info(f"Bank {kind} - Bank: {bank_id}, Amount: {abs(signed_amount)}")

        try:
            _, txn = self.ledger.apply_movement(
                signed_amount,
                transaction_id=generate_bank_transaction_id(),
                bank_id=bank_id,
                user_id=user_id,
                description=description,
                receipt_image=receipt_image,
            )
            self.db.commit()
            self.db.refresh(txn)
            return txn
        except AppError:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"Bank {kind} failed: {str(e)}")
            raise
