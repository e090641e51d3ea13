from datetime import date, datetime, time
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from aqua_erp.core.config import settings
from aqua_erp.logger_config import logger
from aqua_erp.models.buy import BuyCredit, BuyTransaction
from aqua_erp.models.credit import CreditStatus
from aqua_erp.models.product import ProductStock
from aqua_erp.models.sales import SalesCredit

NO_ALERTS_MESSAGE = "No alerts. Everything is up to date."


def start_of_today(today: Optional[date] = None) -> datetime:
    return datetime.combine(today or date.today(), time.min)


class NotificationService:
    """
    Low-stock and overdue-credit alerts.

    The overdue sweep runs here, on demand, every time notifications are read.
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== OVERDUE SWEEP ====================

    def _mark_overdue(self, credit_model, cutoff: datetime) -> int:
        """Bulk-move active ACCEPTED credits whose return date is before `cutoff` to OVERDUE."""
        count = (self.db.query(credit_model)
                 .filter(
                     credit_model.is_active.is_(True),
                     credit_model.status == CreditStatus.ACCEPTED,
                     credit_model.return_date < cutoff,
                 )
                 .update({credit_model.status: CreditStatus.OVERDUE}, synchronize_session=False))
        return count

    def sweep_overdue(self, today: Optional[date] = None) -> dict:
        cutoff = start_of_today(today)
        try:
            sales_count = self._mark_overdue(SalesCredit, cutoff)
            buy_count = self._mark_overdue(BuyCredit, cutoff)
            self.db.commit()
            # bulk update bypasses the identity map
            self.db.expire_all()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Overdue sweep failed: {str(e)}")
            raise

        if sales_count or buy_count:
            logger.info(f"Overdue sweep: {sales_count} sales credits, {buy_count} buy credits marked OVERDUE")
        return {"sales": sales_count, "buy": buy_count}

    # ==================== MESSAGES ====================

    def low_stock_messages(self) -> List[str]:
        stocks = (self.db.query(ProductStock)
                  .options(joinedload(ProductStock.product_type))
                  .filter(
                      ProductStock.is_active.is_(True),
                      ProductStock.quantity < settings.LOW_STOCK_THRESHOLD,
                  )
                  .order_by(ProductStock.id.asc())
                  .all())
        return [
            f'Low stock: "{stock.product_type.name}" has only {stock.quantity} left.'
            for stock in stocks
        ]

    def overdue_sales_messages(self) -> List[str]:
        credits = (self.db.query(SalesCredit)
                   .options(joinedload(SalesCredit.customer))
                   .filter(
                       SalesCredit.status == CreditStatus.OVERDUE,
                       SalesCredit.is_active.is_(True),
                   )
                   .order_by(SalesCredit.id.asc())
                   .all())
        return [
            f'Sales credit overdue: Customer "{credit.counterparty_name}" owes {credit.total_money}.'
            for credit in credits
        ]

    def overdue_buy_messages(self) -> List[str]:
        credits = (self.db.query(BuyCredit)
                   .filter(
                       BuyCredit.status == CreditStatus.OVERDUE,
                       BuyCredit.is_active.is_(True),
                   )
                   .order_by(BuyCredit.id.asc())
                   .all())

        messages = []
        for credit in credits:
            supplier_name = credit.supplier_name
            if not supplier_name:
                line = self.db.query(BuyTransaction).filter(
                    BuyTransaction.transaction_id == credit.transaction_id
                ).first()
                supplier_name = line.supplier_name if line else None
            messages.append(
                f'Buy credit overdue: Supplier "{supplier_name or "Unknown Supplier"}" is owed {credit.total_money}.'
            )
        return messages

    def check_shortages_and_overdue_credits(self, today: Optional[date] = None) -> List[str]:
        """Run the sweep, then collect stock, sales-overdue and buy-overdue messages in that order."""
        self.sweep_overdue(today)
        messages = self.low_stock_messages()
        messages.extend(self.overdue_sales_messages())
        messages.extend(self.overdue_buy_messages())
        return messages
