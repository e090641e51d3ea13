from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from aqua_erp.core.database import Base


class BankAccount(Base):
    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    branch = Column(String(100), nullable=False)
    account_number = Column(String(50), nullable=False)
    owner = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    balances = relationship("BankBalance", back_populates="bank_account")
    transactions = relationship("BankTransaction", back_populates="bank_account")


class BankBalance(Base):
    """Running balance of one bank account. One active row per account."""
    __tablename__ = "bank_balances"

    id = Column(Integer, primary_key=True, autoincrement=True)
    bank_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=False, index=True)
    balance = Column(Numeric(15, 2), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    bank_account = relationship("BankAccount", back_populates="balances")


class BankTransaction(Base):
    __tablename__ = "bank_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    bank_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=False, index=True)
    transaction_id = Column(String(50), nullable=False, index=True)

    money_in = Column("in", Numeric(15, 2), nullable=False, default=0)
    money_out = Column("out", Numeric(15, 2), nullable=False, default=0)
    balance = Column(Numeric(15, 2), nullable=False)

    description = Column(String(500), nullable=True)
    receipt_image = Column(String(500), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    bank_account = relationship("BankAccount", back_populates="transactions")
    user = relationship("User")


class CashBalance(Base):
    """The single global cash drawer balance."""
    __tablename__ = "cash_balance"

    id = Column(Integer, primary_key=True, autoincrement=True)
    balance = Column(Numeric(15, 2), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class CashTransaction(Base):
    __tablename__ = "cash_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    transaction_id = Column(String(50), nullable=False, index=True)

    money_in = Column("in", Numeric(15, 2), nullable=False, default=0)
    money_out = Column("out", Numeric(15, 2), nullable=False, default=0)
    balance = Column(Numeric(15, 2), nullable=False)

    description = Column(String(500), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User")
