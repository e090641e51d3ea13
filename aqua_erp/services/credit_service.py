"""
Credit Repayment Service
Applies partial or full payments against sales credits (a customer owes us)
and buy credits (we owe a supplier).

Example Scenario:
- Sale on credit: 1,000 → SalesCredit.total_money = 1,000 (ACCEPTED)
- Cash balance: 5,000
- Repay 400 CASH → total_money 600, cash 5,400, cash txn in=400 balance=5,400
- Repay 600 CASH → total_money 0, status PAID, is_active False
- Repay 1 more   → InactiveRecord

Buy credits mirror this with money going out of the chosen ledger.
"""

import enum
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from aqua_erp.common.exceptions import (
    AppError,
    CreditNotFound,
    InactiveRecord,
    InvalidAmount,
    InvalidBankAccount,
)
from aqua_erp.logger_config import logger
from aqua_erp.models.buy import BuyCredit, BuyCreditTransaction, BuyTransaction
from aqua_erp.models.credit import CreditStatus, RepaymentMethod
from aqua_erp.models.customer import Customer
from aqua_erp.models.sales import SalesCredit, SalesCreditTransaction, SalesTransaction
from aqua_erp.services.ledger_service import LedgerService, to_money


class CreditKind(str, enum.Enum):
    SALES = "SALES"
    BUY = "BUY"


# credit model, repayment model, sale/purchase line model, ledger direction
_CREDIT_MODELS = {
    CreditKind.SALES: (SalesCredit, SalesCreditTransaction, SalesTransaction, 1),
    CreditKind.BUY: (BuyCredit, BuyCreditTransaction, BuyTransaction, -1),
}


class CreditService:
    """Service for repaying and listing sales/buy credit records."""

    def __init__(self, db: Session):
        self.db = db
        self.ledger = LedgerService(db)

    # ==================== QUERIES ====================

    def get_credit(self, kind: CreditKind, credit_id: int):
        credit_model, _, _, _ = _CREDIT_MODELS[kind]
        credit = self.db.query(credit_model).filter(credit_model.id == credit_id).first()
        if not credit:
            raise CreditNotFound(f"{kind.value.title()} credit {credit_id} not found")
        return credit

    def list_credits(
        self,
        kind: CreditKind,
        status: Optional[CreditStatus] = None,
        active_only: bool = False,
        search: Optional[str] = None,
    ) -> List:
        """List credit records newest first, with optional status / name search."""
        credit_model, _, _, _ = _CREDIT_MODELS[kind]
        query = self.db.query(credit_model)

        if kind == CreditKind.SALES:
            query = query.options(joinedload(SalesCredit.customer))

        if status:
            query = query.filter(credit_model.status == status)

        if active_only:
            query = query.filter(credit_model.is_active.is_(True))

        if search:
            search_term = f"%{search}%"
            if kind == CreditKind.SALES:
                query = query.join(Customer, SalesCredit.customer_id == Customer.id).filter(
                    or_(
                        SalesCredit.transaction_id.ilike(search_term),
                        Customer.full_name.ilike(search_term),
                    )
                )
            else:
                query = query.filter(
                    or_(
                        BuyCredit.transaction_id.ilike(search_term),
                        BuyCredit.supplier_name.ilike(search_term),
                    )
                )

        return query.order_by(credit_model.created_at.desc(), credit_model.id.desc()).all()

    def get_credit_lines(self, kind: CreditKind, credit_id: int) -> List:
        """Sale or purchase lines behind a credit record."""
        credit = self.get_credit(kind, credit_id)
        _, _, line_model, _ = _CREDIT_MODELS[kind]
        return (self.db.query(line_model)
                .options(joinedload(line_model.product_type))
                .filter(line_model.transaction_id == credit.transaction_id)
                .order_by(line_model.id.asc())
                .all())

    def get_repayments(self, kind: CreditKind, credit_id: int) -> List:
        credit = self.get_credit(kind, credit_id)
        return list(credit.repayments)

    # ==================== REPAYMENT ====================

    def repay(
        self,
        kind: CreditKind,
        credit_id: int,
        amount: Decimal,
        payment_method: RepaymentMethod,
        user_id: Optional[int] = None,
        bank_id: Optional[int] = None,
        image: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Apply one repayment. Credit row, ledger balance, credit transaction and
        ledger transaction are written in a single commit, or not at all.
        """
        credit_model, repayment_model, _, direction = _CREDIT_MODELS[kind]
        amount = to_money(amount)

        logger.info(
            f"{kind.value} credit repayment - Credit: {credit_id}, "
            f"Amount: {amount}, Method: {payment_method.value}"
        )

        try:
            if amount <= 0:
                raise InvalidAmount("Amount must be positive")

            if payment_method == RepaymentMethod.BANK and not bank_id:
                raise InvalidBankAccount("bank_id is required for BANK payments")

            credit = (self.db.query(credit_model)
                      .filter(credit_model.id == credit_id)
                      .with_for_update()
                      .first())
            if not credit:
                raise CreditNotFound(f"{kind.value.title()} credit {credit_id} not found")

            if not credit.is_active or credit.status == CreditStatus.PAID:
                raise InactiveRecord(f"Credit {credit.transaction_id} is already settled")

            outstanding = to_money(credit.total_money)
            if amount > outstanding:
                raise InvalidAmount(
                    f"Payment amount exceeds outstanding balance ({outstanding})"
                )

            new_outstanding = outstanding - amount

            balance_row, ledger_txn = self.ledger.apply_movement(
                direction * amount,
                transaction_id=credit.transaction_id,
                bank_id=bank_id if payment_method == RepaymentMethod.BANK else None,
                user_id=user_id,
                description=f"{kind.value.title()} credit repayment",
                receipt_image=image,
            )

            repayment = repayment_model(
                credit_id=credit.id,
                transaction_id=credit.transaction_id,
                amount_payed=amount,
                payment_method=payment_method,
                outstanding_balance=new_outstanding,
                bank_id=bank_id if payment_method == RepaymentMethod.BANK else None,
                cash_transaction_id=ledger_txn.id if payment_method == RepaymentMethod.CASH else None,
                bank_transaction_id=ledger_txn.id if payment_method == RepaymentMethod.BANK else None,
                user_id=user_id,
                image=image,
            )
            self.db.add(repayment)

            credit.total_money = new_outstanding
            if new_outstanding == 0:
                credit.status = CreditStatus.PAID
                credit.is_active = False

            self.db.commit()
            self.db.refresh(credit)
            self.db.refresh(repayment)

            logger.info(
                f"Repayment complete - Credit {credit.transaction_id} "
                f"outstanding {new_outstanding}, status {credit.status.value}"
            )

            return {
                "credit_id": credit.id,
                "transaction_id": credit.transaction_id,
                "repayment_id": repayment.id,
                "amount_payed": amount,
                "payment_method": payment_method,
                "outstanding_balance": new_outstanding,
                "status": credit.status,
                "is_active": credit.is_active,
                "ledger_balance": to_money(balance_row.balance),
                "ledger_transaction_id": ledger_txn.id,
                "payment_date": datetime.now().isoformat(),
            }

        except AppError:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"Repayment failed: {str(e)}")
            raise


def split_credit_totals(credits: List) -> Tuple[Decimal, int]:
    """Total outstanding and number of overdue records in a credit list."""
    total = sum((to_money(c.total_money) for c in credits if c.is_active), Decimal("0.00"))
    overdue = sum(1 for c in credits if c.status == CreditStatus.OVERDUE and c.is_active)
    return total, overdue
