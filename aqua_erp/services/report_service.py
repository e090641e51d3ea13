from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from aqua_erp.logger_config import logger
from aqua_erp.models.buy import BuyTransaction
from aqua_erp.models.credit import CustomerType, PaymentMethod
from aqua_erp.models.customer import Customer
from aqua_erp.models.ledger import BankAccount, BankBalance, BankTransaction, CashTransaction
from aqua_erp.models.product import ProductCategory, ProductStock, ProductType
from aqua_erp.models.sales import SalesTransaction
from aqua_erp.services.ledger_service import to_money
from aqua_erp.utils.filteration import apply_date_range, contains, page_to_offset


def _money(value) -> Decimal:
    return to_money(value or 0)


def _flow_summary(count: int, total_in, total_out) -> dict:
    total_in = _money(total_in)
    total_out = _money(total_out)
    total_money = total_in + total_out
    return {
        "total_transactions": count,
        "total_in": total_in,
        "total_out": total_out,
        "net": total_in - total_out,
        "total_money": total_money,
        "average_transaction": to_money(total_money / count) if count else Decimal("0.00"),
    }


class ReportService:
    """
    Paginated, filterable transaction history.

    Each report returns (rows, total_count, summary). The summary is an
    aggregate over the whole filtered set, independent of the page.
    """

    def __init__(self, db: Session):
        self.db = db

    # ================= CASH TRANSACTIONS ===================

    def cash_transactions(
        self,
        page: int = 1,
        limit: int = 10,
        transaction_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Tuple[List[CashTransaction], int, dict]:
        query = self.db.query(CashTransaction).filter(CashTransaction.is_active.is_(True))

        if transaction_id:
            query = query.filter(contains(CashTransaction.transaction_id, transaction_id))

        query = apply_date_range(query, CashTransaction.created_at, start_date, end_date)

        total_count = query.count()

        totals_row = query.with_entities(
            func.coalesce(func.sum(CashTransaction.money_in), 0),
            func.coalesce(func.sum(CashTransaction.money_out), 0),
        ).first()

        rows = (
            query
            .options(joinedload(CashTransaction.user))
            .order_by(CashTransaction.created_at.desc(), CashTransaction.id.desc())
            .offset(page_to_offset(page, limit))
            .limit(limit)
            .all()
        )
        return rows, total_count, _flow_summary(total_count, totals_row[0], totals_row[1])

    # ================= BANK TRANSACTIONS ===================

    def bank_transactions(
        self,
        page: int = 1,
        limit: int = 10,
        transaction_id: Optional[str] = None,
        bank_branch: Optional[str] = None,
        bank_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Tuple[List[BankTransaction], int, dict]:
        query = (self.db.query(BankTransaction)
                 .join(BankAccount, BankTransaction.bank_id == BankAccount.id)
                 .filter(BankTransaction.is_active.is_(True)))

        if transaction_id:
            query = query.filter(contains(BankTransaction.transaction_id, transaction_id))

        if bank_branch:
            query = query.filter(contains(BankAccount.branch, bank_branch))

        if bank_id:
            query = query.filter(BankTransaction.bank_id == bank_id)

        query = apply_date_range(query, BankTransaction.created_at, start_date, end_date)

        total_count = query.count()

        totals_row = query.with_entities(
            func.coalesce(func.sum(BankTransaction.money_in), 0),
            func.coalesce(func.sum(BankTransaction.money_out), 0),
        ).first()

        rows = (
            query
            .options(joinedload(BankTransaction.bank_account))
            .order_by(BankTransaction.created_at.desc(), BankTransaction.id.desc())
            .offset(page_to_offset(page, limit))
            .limit(limit)
            .all()
        )
        return rows, total_count, _flow_summary(total_count, totals_row[0], totals_row[1])

    # ================= BANK BALANCES ===================

    def bank_balances(self) -> List[BankBalance]:
        return (self.db.query(BankBalance)
                .join(BankAccount, BankBalance.bank_id == BankAccount.id)
                .options(joinedload(BankBalance.bank_account))
                .filter(BankBalance.is_active.is_(True), BankAccount.is_active.is_(True))
                .order_by(BankAccount.branch.asc(), BankAccount.id.asc())
                .all())

    # ================= PRODUCT TRANSACTIONS ===================

    def product_transactions(
        self,
        page: int = 1,
        limit: int = 10,
        product_name: Optional[str] = None,
        category_name: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Tuple[List[ProductType], int, dict]:
        query = (self.db.query(ProductType)
                 .join(ProductCategory, ProductType.category_id == ProductCategory.id)
                 .outerjoin(ProductStock, ProductStock.product_type_id == ProductType.id)
                 .filter(ProductType.is_active.is_(True)))

        if product_name:
            query = query.filter(contains(ProductType.name, product_name))

        if category_name:
            query = query.filter(contains(ProductCategory.name, category_name))

        query = apply_date_range(query, ProductType.updated_at, start_date, end_date)

        total_count = query.count()

        totals_row = query.with_entities(
            func.coalesce(func.sum(ProductStock.quantity), 0),
            func.coalesce(func.sum(ProductStock.amount_money), 0),
        ).first()

        summary = {
            "total_products": total_count,
            "total_quantity": int(totals_row[0]),
            "total_stock_value": _money(totals_row[1]),
        }

        rows = (
            query
            .options(joinedload(ProductType.category), joinedload(ProductType.stock))
            .order_by(ProductType.updated_at.desc(), ProductType.id.desc())
            .offset(page_to_offset(page, limit))
            .limit(limit)
            .all()
        )
        return rows, total_count, summary

    # ================= SALES REPORT ===================

    def sales_report(
        self,
        page: int = 1,
        limit: int = 10,
        customer_name: Optional[str] = None,
        transaction_id: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
        bank_branch: Optional[str] = None,
        customer_type: Optional[CustomerType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Tuple[List[dict], int, dict]:
        """One row per sale (lines grouped by transaction_id)."""
        line_total = SalesTransaction.price_per_quantity * SalesTransaction.quantity

        query = (self.db.query(SalesTransaction)
                 .outerjoin(Customer, SalesTransaction.customer_id == Customer.id)
                 .outerjoin(BankAccount, SalesTransaction.bank_id == BankAccount.id)
                 .filter(SalesTransaction.is_active.is_(True)))

        if customer_name:
            query = query.filter(contains(Customer.full_name, customer_name))
        if transaction_id:
            query = query.filter(contains(SalesTransaction.transaction_id, transaction_id))
        if payment_method:
            query = query.filter(SalesTransaction.payment_method == payment_method)
        if bank_branch:
            query = query.filter(contains(BankAccount.branch, bank_branch))
        if customer_type:
            query = query.filter(SalesTransaction.customer_type == customer_type)

        query = apply_date_range(query, SalesTransaction.created_at, start_date, end_date)

        grouped = query.with_entities(
            SalesTransaction.transaction_id.label("transaction_id"),
            func.min(SalesTransaction.payment_method).label("payment_method"),
            func.min(SalesTransaction.customer_type).label("customer_type"),
            func.min(Customer.full_name).label("customer_name"),
            func.min(SalesTransaction.walker_id).label("walker_id"),
            func.min(BankAccount.branch).label("bank_branch"),
            func.count(SalesTransaction.id).label("items"),
            func.sum(SalesTransaction.quantity).label("total_quantity"),
            func.sum(line_total).label("total_money"),
            func.min(SalesTransaction.created_at).label("created_at"),
        ).group_by(SalesTransaction.transaction_id)

        total_count = grouped.count()

        totals_row = query.with_entities(
            func.coalesce(func.sum(SalesTransaction.quantity), 0),
            func.coalesce(func.sum(line_total), 0),
        ).first()

        summary = {
            "total_transactions": total_count,
            "total_quantity": int(totals_row[0]),
            "total_money": _money(totals_row[1]),
        }

        rows = (
            grouped
            .order_by(func.min(SalesTransaction.created_at).desc(), SalesTransaction.transaction_id.desc())
            .offset(page_to_offset(page, limit))
            .limit(limit)
            .all()
        )
        logger.debug(f"Sales report: {len(rows)} of {total_count} sales")
        return [dict(row._mapping) for row in rows], total_count, summary

    def sales_detail(self, transaction_id: str) -> List[SalesTransaction]:
        return (self.db.query(SalesTransaction)
                .options(
                    joinedload(SalesTransaction.product_type),
                    joinedload(SalesTransaction.customer),
                    joinedload(SalesTransaction.bank_account),
                )
                .filter(SalesTransaction.transaction_id == transaction_id)
                .order_by(SalesTransaction.id.asc())
                .all())

    # ================= BUY REPORT ===================

    def buy_report(
        self,
        page: int = 1,
        limit: int = 10,
        supplier_name: Optional[str] = None,
        transaction_id: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
        bank_branch: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Tuple[List[dict], int, dict]:
        """One row per purchase (lines grouped by transaction_id)."""
        query = (self.db.query(BuyTransaction)
                 .outerjoin(BankAccount, BuyTransaction.bank_id == BankAccount.id))

        if supplier_name:
            query = query.filter(contains(BuyTransaction.supplier_name, supplier_name))
        if transaction_id:
            query = query.filter(contains(BuyTransaction.transaction_id, transaction_id))
        if payment_method:
            query = query.filter(BuyTransaction.payment_method == payment_method)
        if bank_branch:
            query = query.filter(contains(BankAccount.branch, bank_branch))

        query = apply_date_range(query, BuyTransaction.created_at, start_date, end_date)

        grouped = query.with_entities(
            BuyTransaction.transaction_id.label("transaction_id"),
            func.min(BuyTransaction.supplier_name).label("supplier_name"),
            func.min(BuyTransaction.payment_method).label("payment_method"),
            func.min(BankAccount.branch).label("bank_branch"),
            func.count(BuyTransaction.id).label("items"),
            func.sum(BuyTransaction.quantity).label("total_quantity"),
            func.sum(BuyTransaction.total_money).label("total_money"),
            func.min(BuyTransaction.created_at).label("created_at"),
        ).group_by(BuyTransaction.transaction_id)

        total_count = grouped.count()

        totals_row = query.with_entities(
            func.coalesce(func.sum(BuyTransaction.quantity), 0),
            func.coalesce(func.sum(BuyTransaction.total_money), 0),
        ).first()

        summary = {
            "total_transactions": total_count,
            "total_quantity": int(totals_row[0]),
            "total_money": _money(totals_row[1]),
        }

        rows = (
            grouped
            .order_by(func.min(BuyTransaction.created_at).desc(), BuyTransaction.transaction_id.desc())
            .offset(page_to_offset(page, limit))
            .limit(limit)
            .all()
        )
        return [dict(row._mapping) for row in rows], total_count, summary

    def buy_detail(self, transaction_id: str) -> List[BuyTransaction]:
        return (self.db.query(BuyTransaction)
                .options(
                    joinedload(BuyTransaction.product_type),
                    joinedload(BuyTransaction.bank_account),
                )
                .filter(BuyTransaction.transaction_id == transaction_id)
                .order_by(BuyTransaction.id.asc())
                .all())
