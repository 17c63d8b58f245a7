from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict

from stationery.schemas.common import Money


class ProductCreate(BaseModel):
    name: Optional[str] = None
    purchase_price: Optional[Decimal] = None
    selling_price: Optional[Decimal] = None
    stock: Optional[int] = None
    min_stock: Optional[int] = None


class StockUpdate(BaseModel):
    stock: Optional[int] = None
    total_sold: Optional[int] = None


class ProductRead(BaseModel):
    id: int
    name: str
    purchase_price: Money
    selling_price: Money
    stock: int
    min_stock: int
    total_sold: int
    date_added: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductDeleted(BaseModel):
    message: str
    removed_sales: int
