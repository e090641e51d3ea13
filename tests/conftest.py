import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import aqua_erp.models  # noqa: F401
from aqua_erp.core.database import Base
from aqua_erp.core.dependencies import get_db
from aqua_erp.core.security import create_access_token
from aqua_erp.main import app
from aqua_erp.models import (
    BuyCredit,
    CreditStatus,
    Customer,
    ProductCategory,
    ProductStock,
    ProductType,
    SalesCredit,
    UserRole,
)
from aqua_erp.services.bank_account_service import create_bank_account
from aqua_erp.services.ledger_service import LedgerService
from aqua_erp.services.user_service import create_user

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ==================== USERS ====================

@pytest.fixture
def admin_user(db):
    return create_user(db, email="admin@aqua.test", password="admin123",
                       name="Admin", role=UserRole.ADMIN)


@pytest.fixture
def cashier_user(db):
    return create_user(db, email="cashier@aqua.test", password="cashier123",
                       name="Cashier", role=UserRole.CASHIER)


def bearer(user) -> dict:
    token = create_access_token({"sub": str(user.id), "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user):
    return bearer(admin_user)


@pytest.fixture
def cashier_headers(cashier_user):
    return bearer(cashier_user)


# ==================== DATA HELPERS ====================

def money(value) -> Decimal:
    """JSON decimals arrive as strings or numbers; compare them as Decimal."""
    return Decimal(str(value))


def seed_cash(db, amount) -> None:
    LedgerService(db).apply_movement(Decimal(str(amount)), transaction_id="SEED-CASH",
                                     description="Opening cash")
    db.commit()


def make_bank(db, balance="0.00", branch="Main Branch", account_number="001-234"):
    return create_bank_account(db, branch=branch, account_number=account_number,
                               owner="Aqua Ltd", opening_balance=Decimal(balance))


def make_customer(db, full_name="Ali Traders"):
    customer = Customer(full_name=full_name, phone="0300-1234567", address="Lahore")
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def make_stock(db, name="Mineral Water 1.5L", quantity=100, price="50.00", category="Water"):
    product_category = db.query(ProductCategory).filter(ProductCategory.name == category).first()
    if not product_category:
        product_category = ProductCategory(name=category)
        db.add(product_category)
        db.flush()
    product_type = ProductType(name=name, measurement="1.5L", category_id=product_category.id)
    db.add(product_type)
    db.flush()
    stock = ProductStock(product_type_id=product_type.id, quantity=quantity,
                         price_per_quantity=Decimal(price))
    stock.recalculate_amount()
    db.add(stock)
    db.commit()
    db.refresh(stock)
    return stock


def make_sales_credit(db, customer, total="1000.00", return_date=None, transaction_id="TRANS-2024-1-1-000001"):
    credit = SalesCredit(
        transaction_id=transaction_id,
        customer_id=customer.id,
        total_money=Decimal(total),
        issued_date=datetime.now(),
        return_date=return_date or datetime.now() + timedelta(days=30),
        status=CreditStatus.ACCEPTED,
        is_active=True,
    )
    db.add(credit)
    db.commit()
    db.refresh(credit)
    return credit


def make_buy_credit(db, supplier_name="Blue Springs", total="800.00", return_date=None,
                    transaction_id="TRANS-2024-1-1-000002"):
    credit = BuyCredit(
        transaction_id=transaction_id,
        supplier_name=supplier_name,
        total_money=Decimal(total),
        issued_date=datetime.now(),
        return_date=return_date or datetime.now() + timedelta(days=30),
        status=CreditStatus.ACCEPTED,
        is_active=True,
    )
    db.add(credit)
    db.commit()
    db.refresh(credit)
    return credit
