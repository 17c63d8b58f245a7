import logging
from typing import Optional, cast

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from stationery.core.coerce import to_count, to_int, to_money, to_str
from stationery.core.constants import DEFAULT_MIN_STOCK
from stationery.core.dates import utc_now
from stationery.core.errors import NotFoundError
from stationery.database.storage import Storage
from stationery.models.product import Product
from stationery.models.sale import Sale

logger = logging.getLogger(__name__)


class ProductRepository:
    """Persistent store of products.

    Every method accepts an optional ``db`` session so it can take part in a
    larger unit of work; without one it runs in its own.
    """

    def __init__(self, storage: Storage):
        self._storage = storage

    def list(self, db: Optional[Session] = None) -> list[Product]:
        with self._storage.unit_of_work(db, read_only=True) as session:
            products = (
                session.execute(
                    select(Product).order_by(Product.created_at.desc(), Product.id.desc())
                )
                .scalars()
                .all()
            )
            return cast(list[Product], list(products))

    def count(self, db: Optional[Session] = None) -> int:
        with self._storage.unit_of_work(db, read_only=True) as session:
            return session.execute(select(func.count(Product.id))).scalar_one()

    def get(self, product_id, db: Optional[Session] = None, *, for_update: bool = False) -> Product:
        product_id = to_int(product_id, "product_id")
        with self._storage.unit_of_work(db, read_only=not for_update) as session:
            stmt = select(Product).where(Product.id == product_id)
            if for_update:
                stmt = stmt.with_for_update()
            product = session.execute(stmt).scalars().first()
            if product is None:
                raise NotFoundError("product", product_id)
            return product

    def add(
        self,
        name,
        purchase_price,
        selling_price,
        stock,
        min_stock=None,
        db: Optional[Session] = None,
    ) -> Product:
        product = Product(
            name=to_str(name, "name"),
            purchase_price=to_money(purchase_price, "purchase_price"),
            selling_price=to_money(selling_price, "selling_price"),
            stock=to_count(stock, "stock"),
            min_stock=to_count(min_stock, "min_stock", required=False),
            total_sold=0,
        )
        if product.min_stock is None:
            product.min_stock = DEFAULT_MIN_STOCK
        now = utc_now()
        product.date_added = now
        product.created_at = now
        product.updated_at = now

        with self._storage.unit_of_work(db) as session:
            session.add(product)
            session.flush()
            logger.info("Product added with ID: %s (%s)", product.id, product.name)
            return product

    def update_stock(
        self,
        product_id,
        stock,
        total_sold=None,
        db: Optional[Session] = None,
    ) -> Product:
        stock = to_count(stock, "stock")
        total_sold = to_count(total_sold, "total_sold", required=False)
        with self._storage.unit_of_work(db) as session:
            product = self.get(product_id, db=session)
            product.stock = stock
            if total_sold is not None:
                product.total_sold = total_sold
            product.updated_at = utc_now()
            session.flush()
            logger.info(
                "Product stock updated for ID: %s (stock=%s, total_sold=%s)",
                product.id,
                product.stock,
                product.total_sold,
            )
            return product

    def remove(self, product_id, db: Optional[Session] = None) -> int:
        """Delete a product together with its sales; returns the sales removed."""
        with self._storage.unit_of_work(db) as session:
            product = self.get(product_id, db=session)
            result = session.execute(delete(Sale).where(Sale.product_id == product.id))
            session.delete(product)
            session.flush()
            removed_sales = result.rowcount or 0
            logger.info(
                "Product %s deleted; %s dependent sale(s) removed",
                product.id,
                removed_sales,
            )
            return removed_sales


__all__ = ["ProductRepository"]
