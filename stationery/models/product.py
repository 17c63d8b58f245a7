from sqlalchemy import Column, Index, Integer, Numeric, String

from stationery.core.constants import DEFAULT_MIN_STOCK
from stationery.core.dates import utc_now
from stationery.database.base import Base
from stationery.database.types import UTCDateTime


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)

    purchase_price = Column(Numeric(10, 2), nullable=False)
    selling_price = Column(Numeric(10, 2), nullable=False)

    stock = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=False, default=DEFAULT_MIN_STOCK)
    total_sold = Column(Integer, nullable=False, default=0)

    date_added = Column(UTCDateTime, nullable=False, default=utc_now)
    created_at = Column(UTCDateTime, nullable=False, default=utc_now)
    updated_at = Column(
        UTCDateTime,
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    __table_args__ = (
        Index("idx_products_name", "name"),
        {"sqlite_autoincrement": True},
    )

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock


__all__ = ["Product"]
