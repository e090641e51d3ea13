from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from aqua_erp.core.database import Base
from aqua_erp.models.credit import CreditStatus, PaymentMethod, RepaymentMethod


class BuyTransaction(Base):
    """One cart line of a purchase. Lines of the same purchase share `transaction_id`."""
    __tablename__ = "buy_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    transaction_id = Column(String(50), nullable=False, index=True)
    type_id = Column(Integer, ForeignKey("product_types.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    price_per_quantity = Column(Numeric(15, 2), nullable=False)
    total_money = Column(Numeric(15, 2), nullable=False)
    supplier_name = Column(String(255), nullable=False)
    payment_method = Column(Enum(PaymentMethod), nullable=False)
    return_date = Column(DateTime, nullable=True)

    bank_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    product_type = relationship("ProductType")
    bank_account = relationship("BankAccount")
    user = relationship("User")


class BuyCredit(Base):
    """Money owed to a supplier for a purchase made on credit."""
    __tablename__ = "buy_credits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    transaction_id = Column(String(50), nullable=False, unique=True, index=True)
    supplier_name = Column(String(255), nullable=True)

    # remaining principal, decremented on each repayment
    total_money = Column(Numeric(15, 2), nullable=False)
    issued_date = Column(DateTime, nullable=False)
    return_date = Column(DateTime, nullable=False)
    status = Column(Enum(CreditStatus), nullable=False, default=CreditStatus.ACCEPTED)
    description = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    repayments = relationship(
        "BuyCreditTransaction",
        back_populates="credit",
        order_by="BuyCreditTransaction.id",
    )

    @property
    def counterparty_name(self) -> str:
        return self.supplier_name or "Unknown Supplier"


class BuyCreditTransaction(Base):
    """Append-only record of one repayment against a buy credit."""
    __tablename__ = "buy_credit_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    credit_id = Column(Integer, ForeignKey("buy_credits.id"), nullable=False, index=True)
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

    credit = relationship("BuyCredit", back_populates="repayments")
    user = relationship("User")
