from decimal import Decimal
from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional
from aqua_erp.models.credit import CustomerType, PaymentMethod
from aqua_erp.schemas.bank import BankAccountBrief


# ==================== SALES ====================

class SalesCartItem(BaseModel):
    type_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0, decimal_places=2)


class SellProductCreate(BaseModel):
    cart_list: List[SalesCartItem] = Field(..., min_length=1)
    payment_method: PaymentMethod
    customer_type: CustomerType
    customer_id: Optional[int] = Field(None, gt=0)
    bank_id: Optional[int] = Field(None, gt=0)
    return_date: Optional[datetime] = None
    description: Optional[str] = Field(None, max_length=500)

    class Config:
        json_schema_extra = {
            "example": {
                "cart_list": [{"type_id": 1, "quantity": 20, "price": 50.00}],
                "payment_method": "CREDIT",
                "customer_type": "REGULAR",
                "customer_id": 3,
                "return_date": "2024-07-15T00:00:00"
            }
        }


class ProductTypeBrief(BaseModel):
    id: int
    name: str
    measurement: str

    class Config:
        from_attributes = True


class SalesTransactionResponse(BaseModel):
    id: int
    transaction_id: str
    type_id: int
    quantity: int
    price_per_quantity: Decimal
    line_total: Decimal
    payment_method: PaymentMethod
    customer_type: CustomerType
    customer_id: Optional[int] = None
    walker_id: Optional[str] = None
    bank_id: Optional[int] = None
    status: str
    created_at: Optional[datetime] = None
    product_type: Optional[ProductTypeBrief] = None
    bank_account: Optional[BankAccountBrief] = None

    class Config:
        from_attributes = True


class SellProductResponse(BaseModel):
    status: bool = True
    message: str
    transaction_id: str
    total_money: Decimal
    sales_transactions: List[SalesTransactionResponse]


# ==================== PURCHASES ====================

class BuyCartItem(BaseModel):
    product_type_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)
    price_per_quantity: Decimal = Field(..., ge=0, decimal_places=2)


class BuyProductCreate(BaseModel):
    supplier_name: str = Field(..., min_length=1, max_length=255)
    cart_list: List[BuyCartItem] = Field(..., min_length=1)
    payment_method: PaymentMethod
    bank_id: Optional[int] = Field(None, gt=0)
    return_date: Optional[datetime] = None
    description: Optional[str] = Field(None, max_length=500)


class BuyTransactionResponse(BaseModel):
    id: int
    transaction_id: str
    type_id: int
    quantity: int
    price_per_quantity: Decimal
    total_money: Decimal
    supplier_name: str
    payment_method: PaymentMethod
    return_date: Optional[datetime] = None
    bank_id: Optional[int] = None
    created_at: Optional[datetime] = None
    product_type: Optional[ProductTypeBrief] = None
    bank_account: Optional[BankAccountBrief] = None

    class Config:
        from_attributes = True


class BuyProductResponse(BaseModel):
    status: bool = True
    message: str
    transaction_id: str
    total_money: Decimal
    buy_transactions: List[BuyTransactionResponse]
