from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional, List
from aqua_erp.common.exceptions import NotFoundError, ValidationError
from aqua_erp.models.customer import Customer
from aqua_erp.logger_config import logger


def get_customer_by_id(db: Session, customer_id: int) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.id == customer_id).first()


def get_all_customers(db: Session, search: Optional[str] = None) -> List[Customer]:
    query = db.query(Customer).filter(Customer.is_active.is_(True))

    if search:
        search_term = f"%{search}%"
        query = query.filter(
            (Customer.full_name.ilike(search_term)) |
            (Customer.phone.ilike(search_term))
        )

    return query.order_by(Customer.full_name.asc()).all()


def create_customer(
    db: Session,
    full_name: str,
    phone: str,
    address: str,
    email: Optional[str] = None,
    id_card: Optional[str] = None,
) -> Customer:
    customer = Customer(
        full_name=full_name,
        phone=phone,
        address=address,
        email=email,
        id_card=id_card,
    )
    db.add(customer)

    try:
        db.commit()
        db.refresh(customer)
        logger.info(f"Customer '{full_name}' created")
        return customer
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error creating customer: {str(e)}")
        raise ValidationError("Failed to create customer")


def update_customer(db: Session, customer_id: int, **fields) -> Customer:
    """Update the given customer fields; `id_card` only changes when a new path is supplied."""
    customer = get_customer_by_id(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")

    for key, value in fields.items():
        if value is not None:
            setattr(customer, key, value)

    try:
        db.commit()
        db.refresh(customer)
        return customer
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error updating customer: {str(e)}")
        raise ValidationError("Failed to update customer")
