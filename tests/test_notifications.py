from datetime import date, datetime, timedelta

from aqua_erp.models import BuyCredit, CreditStatus, SalesCredit
from aqua_erp.services.notification_service import NO_ALERTS_MESSAGE, NotificationService
from conftest import make_buy_credit, make_customer, make_sales_credit, make_stock

YESTERDAY = datetime.combine(date.today() - timedelta(days=1), datetime.min.time())


class TestOverdueSweep:

    def test_past_due_credit_becomes_overdue(self, db):
        credit = make_sales_credit(db, make_customer(db), total="1000.00", return_date=YESTERDAY)

        counts = NotificationService(db).sweep_overdue()

        assert counts == {"sales": 1, "buy": 0}
        db.refresh(credit)
        assert credit.status == CreditStatus.OVERDUE
        assert credit.is_active is True

    def test_credit_due_today_is_not_overdue(self, db):
        due_today = datetime.combine(date.today(), datetime.min.time())
        credit = make_sales_credit(db, make_customer(db), return_date=due_today)

        NotificationService(db).sweep_overdue()

        db.refresh(credit)
        assert credit.status == CreditStatus.ACCEPTED

    def test_sweep_is_idempotent(self, db):
        make_sales_credit(db, make_customer(db), return_date=YESTERDAY)
        make_buy_credit(db, return_date=YESTERDAY)
        service = NotificationService(db)

        first = service.sweep_overdue()
        second = service.sweep_overdue()

        assert first == {"sales": 1, "buy": 1}
        assert second == {"sales": 0, "buy": 0}
        assert db.query(SalesCredit).filter(SalesCredit.status == CreditStatus.OVERDUE).count() == 1
        assert db.query(BuyCredit).filter(BuyCredit.status == CreditStatus.OVERDUE).count() == 1

    def test_paid_credits_are_never_touched(self, db):
        credit = make_sales_credit(db, make_customer(db), return_date=YESTERDAY)
        credit.status = CreditStatus.PAID
        credit.is_active = False
        db.commit()

        NotificationService(db).sweep_overdue()

        db.refresh(credit)
        assert credit.status == CreditStatus.PAID


class TestNotificationMessages:

    def test_low_stock_boundary(self, db):
        make_stock(db, name="Water 19L", quantity=10)
        make_stock(db, name="Water 500ml", quantity=9)

        messages = NotificationService(db).low_stock_messages()

        assert messages == ['Low stock: "Water 500ml" has only 9 left.']

    def test_messages_are_ordered_stock_sales_buy(self, db):
        make_stock(db, name="Water 500ml", quantity=3)
        make_sales_credit(db, make_customer(db, "Ahmed Store"), total="1000.00", return_date=YESTERDAY)
        make_buy_credit(db, supplier_name="Blue Springs", total="800.00", return_date=YESTERDAY)

        messages = NotificationService(db).check_shortages_and_overdue_credits()

        assert messages == [
            'Low stock: "Water 500ml" has only 3 left.',
            'Sales credit overdue: Customer "Ahmed Store" owes 1000.00.',
            'Buy credit overdue: Supplier "Blue Springs" is owed 800.00.',
        ]

    def test_missing_supplier_name(self, db):
        make_buy_credit(db, supplier_name=None, return_date=YESTERDAY)

        messages = NotificationService(db).check_shortages_and_overdue_credits()

        assert messages == ['Buy credit overdue: Supplier "Unknown Supplier" is owed 800.00.']


class TestNotificationApi:

    def test_no_alerts(self, client, admin_headers):
        response = client.get("/api/admin/notifications", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"status": True, "message": NO_ALERTS_MESSAGE}

    def test_overdue_credit_is_reported(self, client, db, admin_headers):
        make_sales_credit(db, make_customer(db), total="1000.00", return_date=YESTERDAY)

        response = client.get("/api/admin/notifications", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["notifications"] == [
            'Sales credit overdue: Customer "Ali Traders" owes 1000.00.'
        ]


def test_check_sweeps_before_collecting_messages(db):
    make_stock(db, name="Water 500ml", quantity=2)
    credit = make_sales_credit(db, make_customer(db), total="300.00", return_date=YESTERDAY)

    messages = NotificationService(db).check_shortages_and_overdue_credits()

    db.refresh(credit)
    assert credit.status == CreditStatus.OVERDUE
    assert messages == [
        'Low stock: "Water 500ml" has only 2 left.',
        'Sales credit overdue: Customer "Ali Traders" owes 300.00.',
    ]
