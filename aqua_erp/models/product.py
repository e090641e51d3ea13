from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from aqua_erp.core.database import Base


class ProductCategory(Base):
    __tablename__ = "product_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    product_types = relationship("ProductType", back_populates="category")


class ProductType(Base):
    __tablename__ = "product_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    measurement = Column(String(50), nullable=False)  # e.g. 1L, 20L, crate
    category_id = Column(Integer, ForeignKey("product_categories.id"), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("ProductCategory", back_populates="product_types")
    stock = relationship("ProductStock", back_populates="product_type", uselist=False)


class ProductStock(Base):
    __tablename__ = "product_stocks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_type_id = Column(Integer, ForeignKey("product_types.id"), unique=True, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    price_per_quantity = Column(Numeric(15, 2), nullable=False, default=0)
    amount_money = Column(Numeric(15, 2), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    product_type = relationship("ProductType", back_populates="stock")

    def recalculate_amount(self):
        self.amount_money = self.price_per_quantity * self.quantity
