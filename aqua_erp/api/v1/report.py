"""Report Routes - paginated transaction history with summaries"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session

from aqua_erp.common.exceptions import AppError, NotFoundError
from aqua_erp.core.config import settings
from aqua_erp.core.dependencies import get_db
from aqua_erp.logger_config import logger
from aqua_erp.models.credit import CustomerType, PaymentMethod
from aqua_erp.schemas.bank import BankBalanceListResponse
from aqua_erp.schemas.report import (
    BankReportResponse,
    BuyDetailResponse,
    BuyReportResponse,
    CashReportResponse,
    ProductReportResponse,
    SalesDetailResponse,
    SalesReportResponse,
)
from aqua_erp.services.ledger_service import to_money
from aqua_erp.services.report_service import ReportService
from aqua_erp.utils.filteration import build_pagination

router = APIRouter()

PAGE = Query(1, ge=1)
LIMIT = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE)


def _page(rows, page: int, limit: int, total_count: int, summary: dict) -> dict:
    return {
        "data": rows,
        "pagination": build_pagination(page, limit, total_count),
        "summary": summary,
    }


@router.get("/get-cash-transaction", response_model=CashReportResponse)
def get_cash_transactions(
    page: int = PAGE,
    limit: int = LIMIT,
    transaction_id: Optional[str] = Query(None, alias="transactionId"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    try:
        rows, total_count, summary = ReportService(db).cash_transactions(
            page=page, limit=limit, transaction_id=transaction_id,
            start_date=start_date, end_date=end_date,
        )
        return _page(rows, page, limit, total_count, summary)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error in get_cash_transactions: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to fetch cash transactions")


@router.get("/get-bank-transaction", response_model=BankReportResponse)
def get_bank_transactions(
    page: int = PAGE,
    limit: int = LIMIT,
    transaction_id: Optional[str] = Query(None, alias="transactionId"),
    bank_branch: Optional[str] = Query(None, alias="bankBranch"),
    bank_id: Optional[int] = Query(None, alias="bankId", gt=0),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    try:
        rows, total_count, summary = ReportService(db).bank_transactions(
            page=page, limit=limit, transaction_id=transaction_id,
            bank_branch=bank_branch, bank_id=bank_id,
            start_date=start_date, end_date=end_date,
        )
        return _page(rows, page, limit, total_count, summary)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error in get_bank_transactions: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to fetch bank transactions")


@router.get("/get-bank-balance", response_model=BankBalanceListResponse)
def get_bank_balance(db: Session = Depends(get_db)):
    balances = ReportService(db).bank_balances()
    total = sum((to_money(b.balance) for b in balances), to_money(0))
    return {"bank_balances": balances, "total_balance": total}


@router.get("/get-product-transaction", response_model=ProductReportResponse)
def get_product_transactions(
    page: int = PAGE,
    limit: int = LIMIT,
    product_name: Optional[str] = Query(None, alias="productName"),
    category_name: Optional[str] = Query(None, alias="categoryName"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    try:
        rows, total_count, summary = ReportService(db).product_transactions(
            page=page, limit=limit, product_name=product_name,
            category_name=category_name, start_date=start_date, end_date=end_date,
        )
        return _page(rows, page, limit, total_count, summary)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error in get_product_transactions: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to fetch product transactions")


@router.get("/get-sales-report", response_model=SalesReportResponse)
def get_sales_report(
    page: int = PAGE,
    limit: int = LIMIT,
    customer_name: Optional[str] = Query(None, alias="customerName"),
    transaction_id: Optional[str] = Query(None, alias="transactionId"),
    payment_method: Optional[PaymentMethod] = Query(None, alias="paymentMethod"),
    bank_branch: Optional[str] = Query(None, alias="bankBranch"),
    customer_type: Optional[CustomerType] = Query(None, alias="customerType"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    try:
        rows, total_count, summary = ReportService(db).sales_report(
            page=page, limit=limit, customer_name=customer_name,
            transaction_id=transaction_id, payment_method=payment_method,
            bank_branch=bank_branch, customer_type=customer_type,
            start_date=start_date, end_date=end_date,
        )
        return _page(rows, page, limit, total_count, summary)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error in get_sales_report: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to fetch sales report")


@router.get("/get-sales-detail/{transaction_id}", response_model=SalesDetailResponse)
def get_sales_detail(
    transaction_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
):
    lines = ReportService(db).sales_detail(transaction_id)
    if not lines:
        raise NotFoundError(f"Sale {transaction_id} not found")
    return {
        "transaction_id": transaction_id,
        "total_money": sum((to_money(line.line_total) for line in lines), to_money(0)),
        "lines": lines,
    }


@router.get("/get-buy-report", response_model=BuyReportResponse)
def get_buy_report(
    page: int = PAGE,
    limit: int = LIMIT,
    supplier_name: Optional[str] = Query(None, alias="supplierName"),
    transaction_id: Optional[str] = Query(None, alias="transactionId"),
    payment_method: Optional[PaymentMethod] = Query(None, alias="paymentMethod"),
    bank_branch: Optional[str] = Query(None, alias="bankBranch"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    try:
        rows, total_count, summary = ReportService(db).buy_report(
            page=page, limit=limit, supplier_name=supplier_name,
            transaction_id=transaction_id, payment_method=payment_method,
            bank_branch=bank_branch, start_date=start_date, end_date=end_date,
        )
        return _page(rows, page, limit, total_count, summary)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error in get_buy_report: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to fetch buy report")


@router.get("/get-buy-detail/{transaction_id}", response_model=BuyDetailResponse)
def get_buy_detail(
    transaction_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
):
    lines = ReportService(db).buy_detail(transaction_id)
    if not lines:
        raise NotFoundError(f"Purchase {transaction_id} not found")
    return {
        "transaction_id": transaction_id,
        "total_money": sum((to_money(line.total_money) for line in lines), to_money(0)),
        "lines": lines,
    }
