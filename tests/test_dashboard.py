from datetime import date, datetime
from decimal import Decimal

from aqua_erp.models import BuyTransaction, CustomerType, PaymentMethod, SalesTransaction
from aqua_erp.services.dashboard_service import DashboardService
from conftest import make_bank, make_customer, make_stock, seed_cash

TODAY = date(2024, 5, 15)


def add_sale(db, type_id, transaction_id, quantity, price, created_at):
    db.add(SalesTransaction(
        transaction_id=transaction_id,
        type_id=type_id,
        quantity=quantity,
        price_per_quantity=Decimal(price),
        payment_method=PaymentMethod.CASH,
        customer_type=CustomerType.WALKER,
        walker_id="WALKING-1",
        created_at=created_at,
    ))


def add_purchase(db, type_id, quantity, price, created_at):
    db.add(BuyTransaction(
        transaction_id="TRANS-2024-5-2-900001",
        type_id=type_id,
        quantity=quantity,
        price_per_quantity=Decimal(price),
        total_money=Decimal(price) * quantity,
        supplier_name="Blue Springs",
        payment_method=PaymentMethod.CASH,
        created_at=created_at,
    ))


def test_month_summary_and_profit(db):
    stock = make_stock(db, quantity=5)
    make_customer(db)
    add_sale(db, stock.product_type_id, "TRANS-2024-5-3-000001", 2, "50.00", datetime(2024, 5, 3, 10))
    add_sale(db, stock.product_type_id, "TRANS-2024-5-3-000001", 1, "40.00", datetime(2024, 5, 3, 10))
    add_sale(db, stock.product_type_id, "TRANS-2024-4-9-000002", 9, "50.00", datetime(2024, 4, 9, 10))
    add_purchase(db, stock.product_type_id, 3, "20.00", datetime(2024, 5, 2, 9))
    db.commit()

    data = DashboardService(db).get_dashboard_data(today=TODAY)
    summary = data["summary"]

    assert summary["total_sales"] == 1
    assert summary["total_sales_amount"] == Decimal("140.00")
    assert summary["total_sales_quantity"] == 3
    assert summary["total_buy"] == Decimal("60.00")
    assert summary["profit"] == Decimal("80.00")
    assert summary["customer_count"] == 1

    months = data["charts"]["monthly_progress"]
    assert [m["month"] for m in months] == ["Jan", "Feb", "Mar", "Apr", "May"]
    assert months[3]["sales"] == Decimal("450.00")


def test_balances_and_stock_chart(db):
    seed_cash(db, "700.00")
    make_bank(db, "300.00", branch="Gulberg")
    make_stock(db, name="Water 19L", quantity=12)

    data = DashboardService(db).get_dashboard_data(today=TODAY)

    assert data["balances"]["cash_balance"] == Decimal("700.00")
    assert data["balances"]["total_bank_balance"] == Decimal("300.00")
    assert data["balances"]["bank_branches"][0]["branch"] == "Gulberg"
    assert data["summary"]["total_income"] == Decimal("1000.00")
    assert data["charts"]["stock_data"] == [{"name": "Water 19L (1.5L)", "quantity": 12, "category": "Water"}]


def test_dashboard_endpoint(client, db, admin_headers):
    response = client.get("/api/admin/dashboard", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] is True
    assert set(body) == {"status", "summary", "balances", "charts", "recent_transactions"}
    assert body["recent_transactions"] == {"sales": [], "buy": []}
