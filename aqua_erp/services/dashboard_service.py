import calendar
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from aqua_erp.models.buy import BuyTransaction
from aqua_erp.models.customer import Customer
from aqua_erp.models.product import ProductStock, ProductType
from aqua_erp.models.sales import SalesTransaction
from aqua_erp.services.ledger_service import LedgerService, to_money
from aqua_erp.services.report_service import ReportService


def month_bounds(year: int, month: int):
    last_day = calendar.monthrange(year, month)[1]
    return (
        datetime.combine(date(year, month, 1), time.min),
        datetime.combine(date(year, month, last_day), time.max),
    )


class DashboardService:
    """Figures for the admin dashboard: month totals, balances, stock and recent activity."""

    def __init__(self, db: Session):
        self.db = db

    def _sales_totals(self, start: datetime, end: datetime):
        return self.db.query(
            func.count(func.distinct(SalesTransaction.transaction_id)),
            func.coalesce(func.sum(SalesTransaction.quantity), 0),
            func.coalesce(func.sum(SalesTransaction.price_per_quantity * SalesTransaction.quantity), 0),
        ).filter(
            SalesTransaction.is_active.is_(True),
            SalesTransaction.status == "DONE",
            SalesTransaction.created_at >= start,
            SalesTransaction.created_at <= end,
        ).first()

    def _buy_totals(self, start: datetime, end: datetime):
        return self.db.query(
            func.coalesce(func.sum(BuyTransaction.quantity), 0),
            func.coalesce(func.sum(BuyTransaction.total_money), 0),
        ).filter(
            BuyTransaction.created_at >= start,
            BuyTransaction.created_at <= end,
        ).first()

    def get_dashboard_data(self, today: Optional[date] = None) -> Dict[str, Any]:
        today = today or date.today()
        start_of_month, end_of_month = month_bounds(today.year, today.month)

        sales_count, sales_quantity, sales_amount = self._sales_totals(start_of_month, end_of_month)
        buy_quantity, buy_amount = self._buy_totals(start_of_month, end_of_month)
        sales_amount = to_money(sales_amount)
        buy_amount = to_money(buy_amount)

        customer_count = self.db.query(func.count(Customer.id)).filter(
            Customer.is_active.is_(True)
        ).scalar() or 0

        cash_balance = LedgerService(self.db).get_cash_balance()
        bank_balances = ReportService(self.db).bank_balances()
        bank_branches = [
            {
                "bank_id": b.bank_id,
                "branch": b.bank_account.branch,
                "account_number": b.bank_account.account_number,
                "owner": b.bank_account.owner,
                "balance": to_money(b.balance),
            }
            for b in bank_balances
        ]
        total_bank_balance = sum((b["balance"] for b in bank_branches), Decimal("0.00"))

        stocks = (self.db.query(ProductStock)
                  .options(joinedload(ProductStock.product_type).joinedload(ProductType.category))
                  .filter(ProductStock.is_active.is_(True))
                  .order_by(ProductStock.id.asc())
                  .all())
        stock_data = [
            {
                "name": f"{s.product_type.name} ({s.product_type.measurement})",
                "quantity": s.quantity,
                "category": s.product_type.category.name,
            }
            for s in stocks
        ]

        monthly_progress = []
        for month in range(1, today.month + 1):
            start, end = month_bounds(today.year, month)
            _, _, month_sales = self._sales_totals(start, end)
            _, month_buy = self._buy_totals(start, end)
            monthly_progress.append({
                "month": calendar.month_abbr[month],
                "sales": to_money(month_sales),
                "buy": to_money(month_buy),
            })

        recent_sales = (self.db.query(SalesTransaction)
                        .options(joinedload(SalesTransaction.product_type),
                                 joinedload(SalesTransaction.customer))
                        .filter(SalesTransaction.is_active.is_(True))
                        .order_by(SalesTransaction.created_at.desc(), SalesTransaction.id.desc())
                        .limit(5)
                        .all())
        recent_buy = (self.db.query(BuyTransaction)
                      .options(joinedload(BuyTransaction.product_type))
                      .order_by(BuyTransaction.created_at.desc(), BuyTransaction.id.desc())
                      .limit(5)
                      .all())

        return {
            "summary": {
                "total_sales": sales_count or 0,
                "total_sales_amount": sales_amount,
                "total_sales_quantity": int(sales_quantity),
                "customer_count": customer_count,
                "profit": sales_amount - buy_amount,
                "total_income": cash_balance + total_bank_balance,
                "total_buy": buy_amount,
                "total_buy_quantity": int(buy_quantity),
            },
            "balances": {
                "cash_balance": cash_balance,
                "total_bank_balance": total_bank_balance,
                "bank_branches": bank_branches,
            },
            "charts": {
                "stock_data": stock_data,
                "monthly_progress": monthly_progress,
            },
            "recent_transactions": {
                "sales": recent_sales,
                "buy": recent_buy,
            },
        }
