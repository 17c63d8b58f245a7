from sqlalchemy import Column, Date, ForeignKey, Index, Integer, Numeric, String

from stationery.core.constants import WALK_IN_CUSTOMER
from stationery.core.dates import utc_now
from stationery.database.base import Base
from stationery.database.types import UTCDateTime


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True)
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Snapshots of the product at sale time.
    product_name = Column(String(255), nullable=False)
    sale_price = Column(Numeric(10, 2), nullable=False)
    purchase_price = Column(Numeric(10, 2), nullable=False)

    quantity = Column(Integer, nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    profit = Column(Numeric(10, 2), nullable=False)

    sale_date = Column(Date, nullable=False)
    customer_name = Column(String(255), nullable=False, default=WALK_IN_CUSTOMER)
    created_at = Column(UTCDateTime, nullable=False, default=utc_now)

    __table_args__ = (
        Index("idx_sales_date", "sale_date"),
        Index("idx_sales_product_id", "product_id"),
        {"sqlite_autoincrement": True},
    )


__all__ = ["Sale"]
