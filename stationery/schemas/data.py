from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from stationery.schemas.product import ProductRead
from stationery.schemas.sale import SaleRead


class StatusRead(BaseModel):
    status: str
    database: str
    products: int
    sales: int
    timestamp: datetime


class ExportDocument(BaseModel):
    version: str
    export_date: datetime
    database: str
    products: List[ProductRead] = Field(default_factory=list)
    sales: List[SaleRead] = Field(default_factory=list)


class ProductImport(BaseModel):
    id: int
    name: Optional[str] = None
    purchase_price: Optional[Decimal] = None
    selling_price: Optional[Decimal] = None
    stock: Optional[int] = None
    min_stock: Optional[int] = None
    total_sold: Optional[int] = None
    date_added: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SaleImport(BaseModel):
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    quantity: Optional[int] = None
    sale_price: Optional[Decimal] = None
    purchase_price: Optional[Decimal] = None
    total: Optional[Decimal] = None
    profit: Optional[Decimal] = None
    sale_date: Optional[date] = None
    customer_name: Optional[str] = None
    created_at: Optional[datetime] = None


class ImportDocument(BaseModel):
    version: Optional[str] = None
    products: List[ProductImport] = Field(default_factory=list)
    sales: List[SaleImport] = Field(default_factory=list)


class ImportSummary(BaseModel):
    products: int
    sales: int
    replaced: bool


class ClearSummary(BaseModel):
    message: str
    products: int
    sales: int
