from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class ProductTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    product_category_id: int = Field(..., gt=0)
    measurement: str = Field(..., min_length=1, max_length=50)


class StockInitialize(BaseModel):
    product_type_id: int = Field(..., gt=0)
    quantity: int = Field(..., ge=0)
    price_per_quantity: Decimal = Field(..., ge=0, decimal_places=2)


class StockPriceUpdate(BaseModel):
    price_per_quantity: Decimal = Field(..., ge=0, decimal_places=2)


class StockResponse(BaseModel):
    id: int
    product_type_id: int
    quantity: int
    price_per_quantity: Decimal
    amount_money: Decimal
    is_active: bool

    class Config:
        from_attributes = True


class ProductTypeResponse(BaseModel):
    id: int
    name: str
    measurement: str
    category_id: int
    category: Optional[CategoryResponse] = None
    stock: Optional[StockResponse] = None

    class Config:
        from_attributes = True


class ProductTypeListResponse(BaseModel):
    product_types: List[ProductTypeResponse]


class StockListResponse(BaseModel):
    stocks: List[StockResponse]
