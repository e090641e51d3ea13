from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from aqua_erp.common.exceptions import AppError
from aqua_erp.core.dependencies import get_db, get_current_active_user
from aqua_erp.logger_config import logger
from aqua_erp.models.user import User
from aqua_erp.schemas.trade import SellProductCreate, SellProductResponse
from aqua_erp.services.sales_service import SalesService

router = APIRouter()


@router.post(
    "/sell-product",
    response_model=SellProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sell products",
    description="""
    Sell a cart of products in one transaction.

    - CASH / BANK: the total goes into the cash drawer or the bank account.
    - CREDIT: only for REGULAR customers, needs `return_date`; opens a sales credit.
    - WALKER customers get a generated walking id.

    Every line must have enough stock, and a product type may appear only once.
    """
)
def sell_product(
    sale_data: SellProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        result = SalesService(db).sell_product(
            cart_list=[item.model_dump() for item in sale_data.cart_list],
            payment_method=sale_data.payment_method,
            customer_type=sale_data.customer_type,
            customer_id=sale_data.customer_id,
            bank_id=sale_data.bank_id,
            return_date=sale_data.return_date,
            description=sale_data.description,
            user_id=current_user.id,
        )
        return SellProductResponse(**result)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error in sell_product: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to complete the sale")
