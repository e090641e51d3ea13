from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from aqua_erp.common.exceptions import AppError
from aqua_erp.core.dependencies import get_db, get_current_active_user
from aqua_erp.logger_config import logger
from aqua_erp.models.user import User
from aqua_erp.schemas.bank import BankTransactionResponse, BankTransferCreate
from aqua_erp.services.bank_transfer_service import BankTransferService

router = APIRouter()


@router.post("/add-bank-deposit", response_model=BankTransactionResponse, status_code=status.HTTP_201_CREATED)
def add_bank_deposit(
    transfer_data: BankTransferCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Deposit money into a bank account."""
    try:
        return BankTransferService(db).deposit(
            bank_id=transfer_data.bank_id,
            amount=transfer_data.amount,
            user_id=current_user.id,
            description=transfer_data.description,
            receipt_image=transfer_data.receipt_image,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error in add_bank_deposit: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to add bank deposit")


@router.post("/add-bank-withdrawal", response_model=BankTransactionResponse, status_code=status.HTTP_201_CREATED)
def add_bank_withdrawal(
    transfer_data: BankTransferCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Withdraw money from a bank account. Rejected when the balance is too low."""
    try:
        return BankTransferService(db).withdraw(
            bank_id=transfer_data.bank_id,
            amount=transfer_data.amount,
            user_id=current_user.id,
            description=transfer_data.description,
            receipt_image=transfer_data.receipt_image,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error in add_bank_withdrawal: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to add bank withdrawal")
