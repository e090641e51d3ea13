from decimal import Decimal
from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional


class BankAccountCreate(BaseModel):
    branch: str = Field(..., min_length=1, max_length=100)
    account_number: str = Field(..., min_length=1, max_length=50)
    owner: str = Field(..., min_length=1, max_length=255)
    balance: Decimal = Field(Decimal("0.00"), ge=0, decimal_places=2,
                             description="Opening balance")


class BankAccountUpdate(BaseModel):
    branch: Optional[str] = Field(None, min_length=1, max_length=100)
    account_number: Optional[str] = Field(None, min_length=1, max_length=50)
    owner: Optional[str] = Field(None, min_length=1, max_length=255)


class BankAccountBrief(BaseModel):
    id: int
    branch: str
    account_number: str
    owner: Optional[str] = None

    class Config:
        from_attributes = True


class BankAccountResponse(BankAccountBrief):
    balance: Decimal
    is_active: bool


class BankAccountListResponse(BaseModel):
    accounts: List[BankAccountResponse]


class BankTransferCreate(BaseModel):
    """Deposit into / withdrawal from one bank account."""
    bank_id: int = Field(..., gt=0)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    description: Optional[str] = Field(None, max_length=500)
    receipt_image: Optional[str] = Field(None, max_length=500)

    class Config:
        json_schema_extra = {
            "example": {
                "bank_id": 1,
                "amount": 2500.00,
                "description": "Weekly cash deposit",
                "receipt_image": "uploads/receipts/dep-0142.jpg"
            }
        }


class BankTransactionResponse(BaseModel):
    id: int
    bank_id: int
    transaction_id: str
    money_in: Decimal
    money_out: Decimal
    balance: Decimal
    description: Optional[str] = None
    receipt_image: Optional[str] = None
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None
    bank_account: Optional[BankAccountBrief] = None

    class Config:
        from_attributes = True


class BankBalanceResponse(BaseModel):
    id: int
    bank_id: int
    balance: Decimal
    bank_account: BankAccountBrief

    class Config:
        from_attributes = True


class BankBalanceListResponse(BaseModel):
    bank_balances: List[BankBalanceResponse]
    total_balance: Decimal
