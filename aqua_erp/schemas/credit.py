from decimal import Decimal
from datetime import datetime
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from aqua_erp.models.credit import CreditStatus, RepaymentMethod


class CreditRepayCreate(BaseModel):
    """
    Payment against one sales or buy credit record.

    BANK payments need the bank account and the receipt image path.
    """
    credit_id: int = Field(..., gt=0)
    amount_payed: Decimal = Field(..., gt=0, decimal_places=2)
    payment_method: RepaymentMethod
    bank_id: Optional[int] = Field(None, gt=0)
    image: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_bank_payment(self):
        if self.payment_method == RepaymentMethod.BANK:
            if not self.bank_id:
                raise ValueError("bank_id is required for BANK payments")
            if not self.image:
                raise ValueError("Receipt image is required for BANK payments")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "credit_id": 12,
                "amount_payed": 400.00,
                "payment_method": "CASH"
            }
        }


class CreditRepayResponse(BaseModel):
    status: bool = True
    message: str
    credit_id: int
    transaction_id: str
    repayment_id: int
    amount_payed: Decimal
    payment_method: RepaymentMethod
    outstanding_balance: Decimal
    credit_status: CreditStatus
    is_active: bool
    ledger_balance: Decimal
    ledger_transaction_id: int
    payment_date: str


class CreditRepaymentResponse(BaseModel):
    id: int
    credit_id: int
    transaction_id: str
    amount_payed: Decimal
    payment_method: RepaymentMethod
    outstanding_balance: Decimal
    bank_id: Optional[int] = None
    cash_transaction_id: Optional[int] = None
    bank_transaction_id: Optional[int] = None
    user_id: Optional[int] = None
    image: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CreditResponse(BaseModel):
    id: int
    transaction_id: str
    counterparty_name: str
    total_money: Decimal
    issued_date: datetime
    return_date: datetime
    status: CreditStatus
    description: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class SalesCreditResponse(CreditResponse):
    customer_id: int


class BuyCreditResponse(CreditResponse):
    supplier_name: Optional[str] = None


class SalesCreditListResponse(BaseModel):
    credits: List[SalesCreditResponse]
    total_outstanding: Decimal
    overdue_count: int


class BuyCreditListResponse(BaseModel):
    credits: List[BuyCreditResponse]
    total_outstanding: Decimal
    overdue_count: int


class CreditRepaymentListResponse(BaseModel):
    credit_id: int
    transaction_id: str
    outstanding_balance: Decimal
    repayments: List[CreditRepaymentResponse]
