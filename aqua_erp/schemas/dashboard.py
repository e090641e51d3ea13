from decimal import Decimal
from pydantic import BaseModel
from typing import List, Optional
from aqua_erp.schemas.trade import BuyTransactionResponse, SalesTransactionResponse


class DashboardSummary(BaseModel):
    total_sales: int
    total_sales_amount: Decimal
    total_sales_quantity: int
    customer_count: int
    profit: Decimal
    total_income: Decimal
    total_buy: Decimal
    total_buy_quantity: int


class BankBranchBalance(BaseModel):
    bank_id: int
    branch: str
    account_number: str
    owner: Optional[str] = None
    balance: Decimal


class DashboardBalances(BaseModel):
    cash_balance: Decimal
    total_bank_balance: Decimal
    bank_branches: List[BankBranchBalance]


class StockPoint(BaseModel):
    name: str
    quantity: int
    category: str


class MonthlyPoint(BaseModel):
    month: str
    sales: Decimal
    buy: Decimal


class DashboardCharts(BaseModel):
    stock_data: List[StockPoint]
    monthly_progress: List[MonthlyPoint]


class RecentTransactions(BaseModel):
    sales: List[SalesTransactionResponse]
    buy: List[BuyTransactionResponse]


class DashboardResponse(BaseModel):
    status: bool = True
    summary: DashboardSummary
    balances: DashboardBalances
    charts: DashboardCharts
    recent_transactions: RecentTransactions
