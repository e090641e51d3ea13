"""Settings Routes - product catalogue, stock, bank accounts and users"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session

from aqua_erp.common.exceptions import AppError
from aqua_erp.core.dependencies import get_db, get_current_active_user
from aqua_erp.logger_config import logger
from aqua_erp.models.user import User, UserRole
from aqua_erp.schemas.bank import (
    BankAccountCreate,
    BankAccountListResponse,
    BankAccountResponse,
    BankAccountUpdate,
)
from aqua_erp.schemas.common import MessageResponse
from aqua_erp.schemas.product import (
    CategoryCreate,
    CategoryResponse,
    ProductTypeCreate,
    ProductTypeListResponse,
    ProductTypeResponse,
    StockInitialize,
    StockListResponse,
    StockPriceUpdate,
    StockResponse,
)
from aqua_erp.schemas.user import UserCreate, UserListResponse, UserResponse
from aqua_erp.services import bank_account_service, product_service, user_service

router = APIRouter()


# ==================== PRODUCTS ====================

@router.post("/add-product-category", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def add_product_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db),
):
    try:
        return product_service.create_category(db, category_data.name, category_data.description)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error adding product category: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to add product category")


@router.get("/get-product-category", response_model=list[CategoryResponse])
def get_product_category(db: Session = Depends(get_db)):
    return product_service.get_all_categories(db)


@router.post("/add-product-type", response_model=ProductTypeResponse, status_code=status.HTTP_201_CREATED)
def add_product_type(
    type_data: ProductTypeCreate,
    db: Session = Depends(get_db),
):
    try:
        return product_service.create_product_type(
            db,
            name=type_data.name,
            category_id=type_data.product_category_id,
            measurement=type_data.measurement,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error adding product type: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to add product type")


@router.get("/get-product-type", response_model=ProductTypeListResponse)
def get_product_type(
    category_id: Optional[int] = Query(None, alias="categoryId", gt=0),
    db: Session = Depends(get_db),
):
    return {"product_types": product_service.get_all_product_types(db, category_id)}


@router.post("/initialize-stock", response_model=StockResponse, status_code=status.HTTP_201_CREATED)
def initialize_stock(
    stock_data: StockInitialize,
    db: Session = Depends(get_db),
):
    try:
        return product_service.initialize_stock(
            db,
            product_type_id=stock_data.product_type_id,
            quantity=stock_data.quantity,
            price_per_quantity=stock_data.price_per_quantity,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error initializing stock: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to initialize stock")


@router.get("/get-product-stock", response_model=StockListResponse)
def get_product_stock(db: Session = Depends(get_db)):
    return {"stocks": product_service.get_all_stocks(db)}


@router.put("/edit-stock-price/{stock_id}", response_model=StockResponse)
def edit_stock_price(
    price_data: StockPriceUpdate,
    stock_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    return product_service.edit_stock_price(db, stock_id, price_data.price_per_quantity)


# ==================== BANK ACCOUNTS ====================

def _bank_response(account) -> BankAccountResponse:
    return BankAccountResponse(
        id=account.id,
        branch=account.branch,
        account_number=account.account_number,
        owner=account.owner,
        balance=bank_account_service.current_balance(account),
        is_active=account.is_active,
    )


@router.post("/add-bank-list", response_model=BankAccountResponse, status_code=status.HTTP_201_CREATED)
def add_bank_account(
    bank_data: BankAccountCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Create a bank account; the opening balance is booked as its first deposit."""
    try:
        account = bank_account_service.create_bank_account(
            db,
            branch=bank_data.branch,
            account_number=bank_data.account_number,
            owner=bank_data.owner,
            opening_balance=bank_data.balance,
            user_id=current_user.id,
        )
        return _bank_response(account)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error adding bank account: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to add bank account")


@router.get("/get-bank-list", response_model=BankAccountListResponse)
def get_bank_list(db: Session = Depends(get_db)):
    accounts = bank_account_service.get_all_bank_accounts(db)
    return {"accounts": [_bank_response(a) for a in accounts]}


@router.put("/edit-bank/{bank_id}", response_model=BankAccountResponse)
def edit_bank_account(
    bank_data: BankAccountUpdate,
    bank_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    account = bank_account_service.update_bank_account(
        db,
        bank_id,
        branch=bank_data.branch,
        account_number=bank_data.account_number,
        owner=bank_data.owner,
    )
    return _bank_response(account)


@router.delete("/delete-bank/{bank_id}", response_model=MessageResponse)
def delete_bank_account(
    bank_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    bank_account_service.delete_bank_account(db, bank_id)
    return MessageResponse(message="Bank account deleted successfully")


# ==================== USERS ====================

@router.post("/add-user", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def add_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
):
    try:
        return user_service.create_user(
            db,
            email=user_data.email,
            password=user_data.password,
            name=user_data.name,
            role=user_data.role,
            phone=user_data.phone,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error adding user: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to add user")


@router.get("/get-user", response_model=UserListResponse)
def get_users(
    role: Optional[UserRole] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    users = user_service.get_all_users(db, role=role, search=search)
    return {"total": len(users), "users": users}


@router.delete("/delete-user/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    if user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail="You cannot delete your own account")
    user_service.delete_user(db, user_id)
    return MessageResponse(message="User deleted successfully")
