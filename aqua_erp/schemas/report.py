from decimal import Decimal
from datetime import datetime
from pydantic import BaseModel
from typing import List, Optional
from aqua_erp.models.credit import CustomerType, PaymentMethod
from aqua_erp.schemas.bank import BankTransactionResponse
from aqua_erp.schemas.common import Pagination
from aqua_erp.schemas.product import ProductTypeResponse
from aqua_erp.schemas.trade import BuyTransactionResponse, SalesTransactionResponse


class FlowSummary(BaseModel):
    """Totals of an in/out ledger over the whole filtered set."""
    total_transactions: int
    total_in: Decimal
    total_out: Decimal
    net: Decimal
    total_money: Decimal
    average_transaction: Decimal


class CashTransactionResponse(BaseModel):
    id: int
    transaction_id: str
    money_in: Decimal
    money_out: Decimal
    balance: Decimal
    description: Optional[str] = None
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CashReportResponse(BaseModel):
    status: bool = True
    data: List[CashTransactionResponse]
    pagination: Pagination
    summary: FlowSummary


class BankReportResponse(BaseModel):
    status: bool = True
    data: List[BankTransactionResponse]
    pagination: Pagination
    summary: FlowSummary


class ProductSummary(BaseModel):
    total_products: int
    total_quantity: int
    total_stock_value: Decimal


class ProductReportResponse(BaseModel):
    status: bool = True
    data: List[ProductTypeResponse]
    pagination: Pagination
    summary: ProductSummary


class TradeSummary(BaseModel):
    total_transactions: int
    total_quantity: int
    total_money: Decimal


class SalesReportRow(BaseModel):
    transaction_id: str
    payment_method: PaymentMethod
    customer_type: CustomerType
    customer_name: Optional[str] = None
    walker_id: Optional[str] = None
    bank_branch: Optional[str] = None
    items: int
    total_quantity: int
    total_money: Decimal
    created_at: Optional[datetime] = None


class SalesReportResponse(BaseModel):
    status: bool = True
    data: List[SalesReportRow]
    pagination: Pagination
    summary: TradeSummary


class SalesDetailResponse(BaseModel):
    status: bool = True
    transaction_id: str
    total_money: Decimal
    lines: List[SalesTransactionResponse]


class BuyReportRow(BaseModel):
    transaction_id: str
    supplier_name: Optional[str] = None
    payment_method: PaymentMethod
    bank_branch: Optional[str] = None
    items: int
    total_quantity: int
    total_money: Decimal
    created_at: Optional[datetime] = None


class BuyReportResponse(BaseModel):
    status: bool = True
    data: List[BuyReportRow]
    pagination: Pagination
    summary: TradeSummary


class BuyDetailResponse(BaseModel):
    status: bool = True
    transaction_id: str
    total_money: Decimal
    lines: List[BuyTransactionResponse]
