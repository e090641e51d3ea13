from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from aqua_erp.common.exceptions import ConflictError, NotFoundError, ValidationError
from aqua_erp.logger_config import logger
from aqua_erp.models.product import ProductCategory, ProductStock, ProductType
from aqua_erp.services.ledger_service import to_money

# ==================== CATEGORY ====================

def get_category_by_name(db: Session, name: str) -> Optional[ProductCategory]:
    return db.query(ProductCategory).filter(ProductCategory.name == name).first()


def get_all_categories(db: Session) -> List[ProductCategory]:
    return db.query(ProductCategory).order_by(ProductCategory.name.asc()).all()


def create_category(db: Session, name: str, description: Optional[str] = None) -> ProductCategory:
    if get_category_by_name(db, name):
        raise ValidationError("Product category already exists")

    category = ProductCategory(name=name, description=description)
    db.add(category)

    try:
        db.commit()
        db.refresh(category)
        logger.info(f"Product category '{name}' created")
        return category
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error creating product category: {str(e)}")
        raise ConflictError("Failed to create product category")


# ==================== PRODUCT TYPE ====================

def get_all_product_types(db: Session, category_id: Optional[int] = None) -> List[ProductType]:
    query = db.query(ProductType).options(
        joinedload(ProductType.category),
        joinedload(ProductType.stock),
    ).filter(ProductType.is_active.is_(True))

    if category_id:
        query = query.filter(ProductType.category_id == category_id)

    return query.order_by(ProductType.name.asc()).all()


def create_product_type(db: Session, name: str, category_id: int, measurement: str) -> ProductType:
    if db.query(ProductType).filter(ProductType.name == name).first():
        raise ValidationError("Product type already exists")

    category = db.query(ProductCategory).filter(ProductCategory.id == category_id).first()
    if not category:
        raise NotFoundError("Product category not found")

    product_type = ProductType(name=name, category_id=category_id, measurement=measurement)
    db.add(product_type)

    try:
        db.commit()
        db.refresh(product_type)
        logger.info(f"Product type '{name}' created in category {category.name}")
        return product_type
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error creating product type: {str(e)}")
        raise ConflictError("Failed to create product type")


# ==================== STOCK ====================

def get_all_stocks(db: Session) -> List[ProductStock]:
    return (db.query(ProductStock)
            .options(joinedload(ProductStock.product_type))
            .filter(ProductStock.is_active.is_(True))
            .order_by(ProductStock.id.asc())
            .all())


def initialize_stock(
    db: Session,
    product_type_id: int,
    quantity: int,
    price_per_quantity: Decimal,
) -> ProductStock:
    """Create the single stock row of a product type."""
    product_type = db.query(ProductType).filter(ProductType.id == product_type_id).first()
    if not product_type:
        raise NotFoundError("Product type not found")

    if db.query(ProductStock).filter(ProductStock.product_type_id == product_type_id).first():
        raise ValidationError("Stock already initialized for this product type")

    stock = ProductStock(
        product_type_id=product_type_id,
        quantity=quantity,
        price_per_quantity=to_money(price_per_quantity),
    )
    stock.recalculate_amount()
    db.add(stock)

    try:
        db.commit()
        db.refresh(stock)
        logger.info(f"Stock initialized for '{product_type.name}': {quantity} @ {stock.price_per_quantity}")
        return stock
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error initializing stock: {str(e)}")
        raise ConflictError("Failed to initialize stock")


def edit_stock_price(db: Session, stock_id: int, price_per_quantity: Decimal) -> ProductStock:
    stock = db.query(ProductStock).filter(ProductStock.id == stock_id).first()
    if not stock:
        raise NotFoundError("Product stock not found")

    stock.price_per_quantity = to_money(price_per_quantity)
    stock.recalculate_amount()
    db.commit()
    db.refresh(stock)
    return stock
