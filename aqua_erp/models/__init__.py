# aqua_erp/models/__init__.py
from .user import User, UserRole
from .customer import Customer
from .product import ProductCategory, ProductType, ProductStock
from .ledger import BankAccount, BankBalance, BankTransaction, CashBalance, CashTransaction
from .credit import CreditStatus, CustomerType, PaymentMethod, RepaymentMethod
from .sales import SalesTransaction, SalesCredit, SalesCreditTransaction
from .buy import BuyTransaction, BuyCredit, BuyCreditTransaction
