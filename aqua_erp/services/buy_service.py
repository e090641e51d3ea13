from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from aqua_erp.common.exceptions import AppError, ValidationError
from aqua_erp.logger_config import logger
from aqua_erp.models.buy import BuyCredit, BuyTransaction
from aqua_erp.models.credit import CreditStatus, PaymentMethod
from aqua_erp.services.ledger_service import LedgerService, to_money
from aqua_erp.services.sales_service import ensure_unique_types, lock_stock
from aqua_erp.utils.transaction_id import generate_transaction_id


class BuyService:
    """Records purchases from suppliers: stock goes up, money goes out (or a buy credit opens)."""

    def __init__(self, db: Session):
        self.db = db
        self.ledger = LedgerService(db)

    def buy_product(
        self,
        supplier_name: str,
        cart_list: List[Dict[str, Any]],
        payment_method: PaymentMethod,
        bank_id: Optional[int] = None,
        return_date: Optional[datetime] = None,
        description: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Each cart item carries `product_type_id`, `quantity` and `price_per_quantity`."""
        try:
            if not cart_list:
                raise ValidationError("Cart is empty")

            ensure_unique_types([item["product_type_id"] for item in cart_list])

            if payment_method == PaymentMethod.CREDIT and not return_date:
                raise ValidationError("return_date is required for CREDIT purchases")

            if payment_method == PaymentMethod.BANK and not bank_id:
                raise ValidationError("bank_id is required for BANK payments")

            transaction_id = generate_transaction_id()
            total_money = Decimal("0.00")
            lines = []

            for item in cart_list:
                quantity = int(item["quantity"])
                price = to_money(item["price_per_quantity"])

                stock = lock_stock(self.db, item["product_type_id"])
                stock.quantity += quantity
                stock.recalculate_amount()

                line = BuyTransaction(
                    transaction_id=transaction_id,
                    type_id=item["product_type_id"],
                    quantity=quantity,
                    price_per_quantity=price,
                    total_money=price * quantity,
                    supplier_name=supplier_name,
                    payment_method=payment_method,
                    bank_id=bank_id if payment_method == PaymentMethod.BANK else None,
                    return_date=return_date if payment_method == PaymentMethod.CREDIT else None,
                    user_id=user_id,
                )
                self.db.add(line)
                lines.append(line)
                total_money += price * quantity

            if total_money <= 0:
                raise ValidationError("Purchase total must be greater than zero")

            if payment_method == PaymentMethod.CREDIT:
                self.db.add(BuyCredit(
                    transaction_id=transaction_id,
                    supplier_name=supplier_name,
                    total_money=total_money,
                    issued_date=datetime.now(),
                    return_date=return_date,
                    status=CreditStatus.ACCEPTED,
                    description=description,
                    is_active=True,
                ))
            else:
                self.ledger.apply_movement(
                    -total_money,
                    transaction_id=transaction_id,
                    bank_id=bank_id if payment_method == PaymentMethod.BANK else None,
                    user_id=user_id,
                    description=description or f"Purchase from {supplier_name}",
                )

            self.db.commit()
            for line in lines:
                self.db.refresh(line)

            logger.info(
                f"Purchase {transaction_id} from {supplier_name} completed - "
                f"{len(lines)} lines, total {total_money}, method {payment_method.value}"
            )

            return {
                "message": "Purchase completed successfully",
                "transaction_id": transaction_id,
                "total_money": total_money,
                "buy_transactions": lines,
            }

        except AppError:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error in buy_product: {str(e)}")
            raise
