"""Credit Repayment Routes"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session

from aqua_erp.common.exceptions import AppError
from aqua_erp.core.dependencies import get_db, get_current_active_user
from aqua_erp.logger_config import logger
from aqua_erp.models.credit import CreditStatus
from aqua_erp.models.user import User
from aqua_erp.schemas.credit import (
    BuyCreditListResponse,
    CreditRepayCreate,
    CreditRepaymentListResponse,
    CreditRepayResponse,
    SalesCreditListResponse,
)
from aqua_erp.schemas.trade import BuyTransactionResponse, SalesTransactionResponse
from aqua_erp.services.credit_service import CreditKind, CreditService, split_credit_totals

router = APIRouter()


def _repay(kind: CreditKind, payment_data: CreditRepayCreate, db: Session, current_user: User):
    service = CreditService(db)
    result = service.repay(
        kind,
        credit_id=payment_data.credit_id,
        amount=payment_data.amount_payed,
        payment_method=payment_data.payment_method,
        user_id=current_user.id,
        bank_id=payment_data.bank_id,
        image=payment_data.image,
    )
    credit_status = result.pop("status")
    message = ("Credit fully paid" if not result["is_active"]
               else "Repayment recorded successfully")
    return CreditRepayResponse(message=message, credit_status=credit_status, **result)


@router.post(
    "/sales-credit-repay",
    response_model=CreditRepayResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Repay a sales credit",
    description="""
    Customer pays back part or all of a sale made on credit.

    **Example Scenario:**
    - Credit outstanding: 1,000
    - Cash balance: 5,000
    - Pay 400 CASH

    **Result:**
    - Credit outstanding: 600 (still ACCEPTED/OVERDUE)
    - Cash balance: 5,400, one cash transaction with in = 400

    Paying the remaining 600 moves the credit to PAID and deactivates it.
    Paying more than the outstanding amount is rejected.
    """
)
def repay_sales_credit(
    payment_data: CreditRepayCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        return _repay(CreditKind.SALES, payment_data, db, current_user)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to process sales credit repayment")


@router.post(
    "/buy-credit-repay",
    response_model=CreditRepayResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Repay a buy credit",
    description="""
    Pay a supplier back for a purchase made on credit. Money leaves the
    cash drawer or the chosen bank account; the payment is rejected if the
    ledger does not hold enough.
    """
)
def repay_buy_credit(
    payment_data: CreditRepayCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        return _repay(CreditKind.BUY, payment_data, db, current_user)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to process buy credit repayment")


@router.get("/sales-credit", response_model=SalesCreditListResponse)
def list_sales_credits(
    credit_status: Optional[CreditStatus] = Query(None, alias="status"),
    active_only: bool = Query(False, alias="activeOnly"),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """Sales credits newest first, with customer names."""
    try:
        credits = CreditService(db).list_credits(
            CreditKind.SALES, status=credit_status, active_only=active_only, search=search
        )
        total, overdue = split_credit_totals(credits)
        return {"credits": credits, "total_outstanding": total, "overdue_count": overdue}
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error listing sales credits: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to fetch sales credits")


@router.get("/buy-credit", response_model=BuyCreditListResponse)
def list_buy_credits(
    credit_status: Optional[CreditStatus] = Query(None, alias="status"),
    active_only: bool = Query(False, alias="activeOnly"),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    try:
        credits = CreditService(db).list_credits(
            CreditKind.BUY, status=credit_status, active_only=active_only, search=search
        )
        total, overdue = split_credit_totals(credits)
        return {"credits": credits, "total_outstanding": total, "overdue_count": overdue}
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error listing buy credits: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to fetch buy credits")


@router.get("/sales-credit/{credit_id}/details", response_model=list[SalesTransactionResponse])
def sales_credit_details(
    credit_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    """Sale lines behind one sales credit."""
    return CreditService(db).get_credit_lines(CreditKind.SALES, credit_id)


@router.get("/buy-credit/{credit_id}/details", response_model=list[BuyTransactionResponse])
def buy_credit_details(
    credit_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    return CreditService(db).get_credit_lines(CreditKind.BUY, credit_id)


def _repayment_history(kind: CreditKind, credit_id: int, db: Session) -> dict:
    service = CreditService(db)
    credit = service.get_credit(kind, credit_id)
    return {
        "credit_id": credit.id,
        "transaction_id": credit.transaction_id,
        "outstanding_balance": credit.total_money,
        "repayments": service.get_repayments(kind, credit_id),
    }


@router.get("/sales-credit/{credit_id}/repayments", response_model=CreditRepaymentListResponse)
def sales_credit_repayments(
    credit_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    return _repayment_history(CreditKind.SALES, credit_id, db)


@router.get("/buy-credit/{credit_id}/repayments", response_model=CreditRepaymentListResponse)
def buy_credit_repayments(
    credit_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    return _repayment_history(CreditKind.BUY, credit_id, db)


# Cashiers take customer repayments at the counter but never pay suppliers.
cashier_router = APIRouter()
cashier_router.add_api_route(
    "/sales-credit-repay", repay_sales_credit, methods=["POST"],
    response_model=CreditRepayResponse, status_code=status.HTTP_201_CREATED,
)
cashier_router.add_api_route(
    "/sales-credit", list_sales_credits, methods=["GET"],
    response_model=SalesCreditListResponse,
)
cashier_router.add_api_route(
    "/sales-credit/{credit_id}/repayments", sales_credit_repayments, methods=["GET"],
    response_model=CreditRepaymentListResponse,
)
