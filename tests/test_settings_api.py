from decimal import Decimal

from aqua_erp.models import BankTransaction, User
from aqua_erp.services.ledger_service import LedgerService
from conftest import make_stock, money


class TestBankAccounts:

    def test_opening_balance_is_booked_as_transaction(self, client, db, admin_headers):
        response = client.post(
            "/api/admin/add-bank-list",
            json={"branch": "Gulberg", "account_number": "PK-001", "owner": "Aqua Ltd", "balance": 1500},
            headers=admin_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert money(body["balance"]) == Decimal("1500.00")

        txn = db.query(BankTransaction).filter(BankTransaction.bank_id == body["id"]).one()
        assert txn.transaction_id.startswith("BANK-TRANS-")
        assert txn.money_in == Decimal("1500.00")
        assert LedgerService(db).get_bank_balance(body["id"]) == Decimal("1500.00")

    def test_duplicate_account_is_rejected(self, client, admin_headers):
        payload = {"branch": "Gulberg", "account_number": "PK-001", "owner": "Aqua Ltd"}
        client.post("/api/admin/add-bank-list", json=payload, headers=admin_headers)

        response = client.post("/api/admin/add-bank-list", json=payload, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Bank account already exists"

    def test_edit_and_delete(self, client, admin_headers):
        created = client.post(
            "/api/admin/add-bank-list",
            json={"branch": "Gulberg", "account_number": "PK-001", "owner": "Aqua Ltd"},
            headers=admin_headers,
        ).json()

        edited = client.put(
            f"/api/admin/edit-bank/{created['id']}", json={"owner": "Aqua Water Ltd"}, headers=admin_headers
        )
        assert edited.json()["owner"] == "Aqua Water Ltd"

        deleted = client.delete(f"/api/admin/delete-bank/{created['id']}", headers=admin_headers)
        assert deleted.status_code == 200

        listed = client.get("/api/admin/get-bank-list", headers=admin_headers).json()
        assert listed["accounts"] == []

    def test_edit_missing_account(self, client, admin_headers):
        response = client.put("/api/admin/edit-bank/999", json={"owner": "X"}, headers=admin_headers)
        assert response.status_code == 404


class TestProducts:

    def test_catalogue_and_stock_flow(self, client, admin_headers):
        category = client.post(
            "/api/admin/add-product-category", json={"name": "Water"}, headers=admin_headers
        ).json()
        product_type = client.post(
            "/api/admin/add-product-type",
            json={"name": "Water 19L", "product_category_id": category["id"], "measurement": "19L"},
            headers=admin_headers,
        ).json()

        stock = client.post(
            "/api/admin/initialize-stock",
            json={"product_type_id": product_type["id"], "quantity": 40, "price_per_quantity": 150},
            headers=admin_headers,
        )
        assert stock.status_code == 201
        assert money(stock.json()["amount_money"]) == Decimal("6000.00")

        repriced = client.put(
            f"/api/admin/edit-stock-price/{stock.json()['id']}",
            json={"price_per_quantity": 160},
            headers=admin_headers,
        )
        assert money(repriced.json()["amount_money"]) == Decimal("6400.00")

        types = client.get(
            "/api/admin/get-product-type", params={"categoryId": category["id"]}, headers=admin_headers
        ).json()
        assert types["product_types"][0]["stock"]["quantity"] == 40

    def test_stock_initialized_once(self, client, db, admin_headers):
        stock = make_stock(db)

        response = client.post(
            "/api/admin/initialize-stock",
            json={"product_type_id": stock.product_type_id, "quantity": 1, "price_per_quantity": 1},
            headers=admin_headers,
        )
        assert response.status_code == 400

    def test_duplicate_category(self, client, admin_headers):
        client.post("/api/admin/add-product-category", json={"name": "Water"}, headers=admin_headers)
        response = client.post("/api/admin/add-product-category", json={"name": "Water"}, headers=admin_headers)
        assert response.status_code == 400


class TestUsers:

    def test_add_list_and_delete_user(self, client, db, admin_user, admin_headers):
        created = client.post(
            "/api/admin/add-user",
            json={"email": "Counter@Aqua.test", "name": "Counter", "password": "secret1", "role": "CASHIER"},
            headers=admin_headers,
        )
        assert created.status_code == 201
        assert created.json()["email"] == "counter@aqua.test"
        assert "password_hash" not in created.json()

        cashiers = client.get("/api/admin/get-user", params={"role": "CASHIER"}, headers=admin_headers).json()
        assert cashiers["total"] == 1

        user_id = created.json()["id"]
        assert client.delete(f"/api/admin/delete-user/{user_id}", headers=admin_headers).status_code == 200
        assert db.get(User, user_id).is_active is False

    def test_admin_cannot_delete_self(self, client, admin_user, admin_headers):
        response = client.delete(f"/api/admin/delete-user/{admin_user.id}", headers=admin_headers)
        assert response.status_code == 400

    def test_duplicate_email(self, client, admin_user, admin_headers):
        response = client.post(
            "/api/admin/add-user",
            json={"email": "admin@aqua.test", "name": "Again", "password": "secret1", "role": "ADMIN"},
            headers=admin_headers,
        )
        assert response.status_code == 400


class TestCustomers:

    def test_cashier_manages_customers(self, client, cashier_headers):
        created = client.post(
            "/api/cashier/add-customer",
            json={"full_name": "Ahmed Store", "phone": "0321-7654321", "address": "Karachi"},
            headers=cashier_headers,
        )
        assert created.status_code == 201
        customer_id = created.json()["id"]

        updated = client.put(
            f"/api/cashier/update-customer/{customer_id}",
            json={"address": "Hyderabad"},
            headers=cashier_headers,
        )
        assert updated.json()["address"] == "Hyderabad"
        assert updated.json()["full_name"] == "Ahmed Store"

        found = client.get("/api/cashier/get-customers", params={"search": "ahmed"}, headers=cashier_headers)
        assert found.json()["total"] == 1

    def test_update_missing_customer(self, client, admin_headers):
        response = client.put("/api/admin/update-customer/404", json={"address": "X"}, headers=admin_headers)
        assert response.status_code == 404
