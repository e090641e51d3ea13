from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from aqua_erp.core.database import Base
from aqua_erp.models.credit import CreditStatus, CustomerType, PaymentMethod, RepaymentMethod


class SalesTransaction(Base):
    """One cart line of a sale. Lines of the same sale share `transaction_id`."""
    __tablename__ = "sales_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    transaction_id = Column(String(50), nullable=False, index=True)
    type_id = Column(Integer, ForeignKey("product_types.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    price_per_quantity = Column(Numeric(15, 2), nullable=False)
    payment_method = Column(Enum(PaymentMethod), nullable=False)
    customer_type = Column(Enum(CustomerType), nullable=False)

    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    walker_id = Column(String(50), nullable=True)
    bank_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    status = Column(String(20), nullable=False, default="DONE")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    product_type = relationship("ProductType")
    customer = relationship("Customer", back_populates="sales")
    bank_account = relationship("BankAccount")
    user = relationship("User")

    @property
    def line_total(self):
        return self.price_per_quantity * self.quantity


class SalesCredit(Base):
    """Money a customer owes for a sale made on credit."""
    __tablename__ = "sales_credits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    transaction_id = Column(String(50), nullable=False, unique=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)

    # remaining principal, decremented on each repayment
    total_money = Column(Numeric(15, 2), nullable=False)
    issued_date = Column(DateTime, nullable=False)
    return_date = Column(DateTime, nullable=False)
    status = Column(Enum(CreditStatus), nullable=False, default=CreditStatus.ACCEPTED)
    description = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    customer = relationship("Customer", back_populates="credits")
    repayments = relationship(
        "SalesCreditTransaction",
        back_populates="credit",
        order_by="SalesCreditTransaction.id",
    )

    @property
    def counterparty_name(self) -> str:
        return self.customer.full_name if self.customer else "Unknown Customer"


class SalesCreditTransaction(Base):
    """Append-only record of one repayment against a sales credit."""
    __tablename__ = "sales_credit_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    credit_id = Column(Integer, ForeignKey("sales_credits.id"), nullable=False, index=True)
    transaction_id = Column(String(50), nullable=False, index=True)

    amount_payed = Column(Numeric(15, 2), nullable=False)
    payment_method = Column(Enum(RepaymentMethod), nullable=False)
    outstanding_balance = Column(Numeric(15, 2), nullable=False)

    bank_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=True)
    cash_transaction_id = Column(Integer, ForeignKey("cash_transactions.id"), nullable=True)
    bank_transaction_id = Column(Integer, ForeignKey("bank_transactions.id"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    image = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    credit = relationship("SalesCredit", back_populates="repayments")
    user = relationship("User")
