from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from stationery.schemas.common import Money


class SaleCreate(BaseModel):
    product_id: Optional[int] = None
    quantity: Optional[int] = None
    sale_date: Optional[date] = None
    customer_name: Optional[str] = None


class SaleRead(BaseModel):
    id: int
    product_id: int
    product_name: str
    quantity: int
    sale_price: Money
    purchase_price: Money
    total: Money
    profit: Money
    sale_date: date
    customer_name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
