"""
Sales Service
Records a sale: decrements stock for each cart line, then settles it in
one of three ways:

- CASH   → +total on the cash ledger
- BANK   → +total on the chosen bank ledger
- CREDIT → opens a SalesCredit (ACCEPTED) for a REGULAR customer

Everything happens in one database transaction.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from aqua_erp.common.exceptions import (
    AppError,
    InsufficientStock,
    NotFoundError,
    ValidationError,
)
from aqua_erp.logger_config import logger
from aqua_erp.models.credit import CreditStatus, CustomerType, PaymentMethod
from aqua_erp.models.customer import Customer
from aqua_erp.models.product import ProductStock
from aqua_erp.models.sales import SalesCredit, SalesTransaction
from aqua_erp.services.ledger_service import LedgerService, to_money
from aqua_erp.utils.transaction_id import generate_transaction_id, generate_walking_id


def lock_stock(db: Session, product_type_id: int) -> ProductStock:
    stock = (db.query(ProductStock)
             .filter(ProductStock.product_type_id == product_type_id,
                     ProductStock.is_active.is_(True))
             .with_for_update()
             .first())
    if not stock:
        raise NotFoundError(f"Product stock not found for product type {product_type_id}")
    return stock


def ensure_unique_types(type_ids: List[int]):
    if len(type_ids) != len(set(type_ids)):
        raise ValidationError(
            "Product already selected. Each product type can only be added once to the cart."
        )


class SalesService:

    def __init__(self, db: Session):
        self.db = db
        self.ledger = LedgerService(db)

    def sell_product(
        self,
        cart_list: List[Dict[str, Any]],
        payment_method: PaymentMethod,
        customer_type: CustomerType,
        customer_id: Optional[int] = None,
        bank_id: Optional[int] = None,
        return_date: Optional[datetime] = None,
        description: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Sell the cart. Each cart item carries `type_id`, `quantity` and `price`.
        """
        try:
            if not cart_list:
                raise ValidationError("Cart is empty")

            ensure_unique_types([item["type_id"] for item in cart_list])

            customer = None
            if customer_type == CustomerType.REGULAR:
                if not customer_id:
                    raise ValidationError("customer_id is required for REGULAR customers")
                customer = self.db.query(Customer).filter(
                    Customer.id == customer_id,
                    Customer.is_active.is_(True)
                ).first()
                if not customer:
                    raise NotFoundError(f"Customer {customer_id} not found")

            if payment_method == PaymentMethod.CREDIT:
                if customer is None:
                    raise ValidationError("Credit sales are only allowed for REGULAR customers")
                if not return_date:
                    raise ValidationError("return_date is required for CREDIT sales")

            if payment_method == PaymentMethod.BANK and not bank_id:
                raise ValidationError("bank_id is required for BANK payments")

            transaction_id = generate_transaction_id()
            walker_id = generate_walking_id() if customer_type == CustomerType.WALKER else None
            total_money = Decimal("0.00")
            lines = []

            for item in cart_list:
                quantity = int(item["quantity"])
                price = to_money(item["price"])

                stock = lock_stock(self.db, item["type_id"])
                if stock.quantity < quantity:
                    raise InsufficientStock(
                        f"Insufficient stock. Available: {stock.quantity}, Requested: {quantity}"
                    )

                stock.quantity -= quantity
                stock.recalculate_amount()

                line = SalesTransaction(
                    transaction_id=transaction_id,
                    type_id=item["type_id"],
                    quantity=quantity,
                    price_per_quantity=price,
                    payment_method=payment_method,
                    customer_type=customer_type,
                    customer_id=customer.id if customer else None,
                    walker_id=walker_id,
                    bank_id=bank_id if payment_method == PaymentMethod.BANK else None,
                    user_id=user_id,
                    status="DONE",
                )
                self.db.add(line)
                lines.append(line)
                total_money += price * quantity

            if total_money <= 0:
                raise ValidationError("Sale total must be greater than zero")

            if payment_method == PaymentMethod.CREDIT:
                self.db.add(SalesCredit(
                    transaction_id=transaction_id,
                    customer_id=customer.id,
                    total_money=total_money,
                    issued_date=datetime.now(),
                    return_date=return_date,
                    status=CreditStatus.ACCEPTED,
                    description=description,
                    is_active=True,
                ))
            else:
                self.ledger.apply_movement(
                    total_money,
                    transaction_id=transaction_id,
                    bank_id=bank_id if payment_method == PaymentMethod.BANK else None,
                    user_id=user_id,
                    description=description or "Product sale",
                )

            self.db.commit()
            for line in lines:
                self.db.refresh(line)

            logger.info(
                f"Sale {transaction_id} completed - {len(lines)} lines, "
                f"total {total_money}, method {payment_method.value}"
            )

            return {
                "message": "Sale completed successfully",
                "transaction_id": transaction_id,
                "total_money": total_money,
                "sales_transactions": lines,
            }

        except AppError:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error in sell_product: {str(e)}")
            raise
