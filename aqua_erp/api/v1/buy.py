from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from aqua_erp.common.exceptions import AppError
from aqua_erp.core.dependencies import get_db, get_current_active_user
from aqua_erp.logger_config import logger
from aqua_erp.models.user import User
from aqua_erp.schemas.trade import BuyProductCreate, BuyProductResponse
from aqua_erp.services.buy_service import BuyService

router = APIRouter()


@router.post("/buy-product", response_model=BuyProductResponse, status_code=status.HTTP_201_CREATED)
def buy_product(
    purchase_data: BuyProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """
    Buy a cart of products from a supplier. Stock goes up; CASH/BANK pay now,
    CREDIT opens a buy credit due on `return_date`.
    """
    try:
        result = BuyService(db).buy_product(
            supplier_name=purchase_data.supplier_name,
            cart_list=[item.model_dump() for item in purchase_data.cart_list],
            payment_method=purchase_data.payment_method,
            bank_id=purchase_data.bank_id,
            return_date=purchase_data.return_date,
            description=purchase_data.description,
            user_id=current_user.id,
        )
        return BuyProductResponse(**result)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error in buy_product: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to complete the purchase")
