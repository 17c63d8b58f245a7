"""Administrative data operations: status, export, import and clear-all."""

import io
import logging
from datetime import datetime, timezone
from decimal import Decimal

from openpyxl import Workbook
from sqlalchemy import delete, func, select

from stationery.core.coerce import to_count, to_date, to_datetime, to_int, to_money, to_str
from stationery.core.constants import DEFAULT_MIN_STOCK, EXPORT_FORMAT_VERSION, WALK_IN_CUSTOMER
from stationery.core.dates import utc_now
from stationery.core.errors import ValidationError
from stationery.database.storage import Storage
from stationery.models.product import Product
from stationery.models.sale import Sale
from stationery.schemas.product import ProductRead
from stationery.schemas.sale import SaleRead
from stationery.services.sale_service import compute_sale_amounts

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = list(ProductRead.model_fields)
SALE_COLUMNS = list(SaleRead.model_fields)


def _excel_value(value):
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class DataService:
    def __init__(self, storage: Storage):
        self._storage = storage

    def status(self) -> dict:
        with self._storage.unit_of_work(read_only=True) as db:
            products = db.execute(select(func.count(Product.id))).scalar_one()
            sales = db.execute(select(func.count(Sale.id))).scalar_one()
        return {
            "status": "connected",
            "database": self._storage.dialect,
            "products": products,
            "sales": sales,
            "timestamp": utc_now(),
        }

    def _load_all(self):
        with self._storage.unit_of_work(read_only=True) as db:
            products = (
                db.execute(select(Product).order_by(Product.created_at, Product.id)).scalars().all()
            )
            sales = db.execute(select(Sale).order_by(Sale.created_at, Sale.id)).scalars().all()
        return list(products), list(sales)

    def export(self) -> dict:
        products, sales = self._load_all()
        logger.info("Database exported: %s products, %s sales", len(products), len(sales))
        return {
            "version": EXPORT_FORMAT_VERSION,
            "export_date": utc_now(),
            "database": self._storage.dialect,
            "products": [ProductRead.model_validate(item) for item in products],
            "sales": [SaleRead.model_validate(item) for item in sales],
        }

    def export_workbook(self) -> bytes:
        document = self.export()
        workbook = Workbook()

        products_sheet = workbook.active
        products_sheet.title = "products"
        products_sheet.append(PRODUCT_COLUMNS)
        for product in document["products"]:
            products_sheet.append([_excel_value(getattr(product, name)) for name in PRODUCT_COLUMNS])

        sales_sheet = workbook.create_sheet("sales")
        sales_sheet.append(SALE_COLUMNS)
        for sale in document["sales"]:
            sales_sheet.append([_excel_value(getattr(sale, name)) for name in SALE_COLUMNS])

        meta_sheet = workbook.create_sheet("meta")
        meta_sheet.append(["version", document["version"]])
        meta_sheet.append(["export_date", _excel_value(document["export_date"])])
        meta_sheet.append(["database", document["database"]])

        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    def clear_all(self) -> dict:
        with self._storage.unit_of_work() as db:
            sales = db.execute(delete(Sale)).rowcount or 0
            products = db.execute(delete(Product)).rowcount or 0
            self._storage.reset_sequences(db)
        logger.info("All database records cleared: %s products, %s sales", products, sales)
        return {"products": products, "sales": sales}

    def import_data(self, document, replace: bool = False) -> dict:
        """Re-seed the store from an export document.

        Products receive fresh identifiers; each sale is re-pointed at the new
        identifier of the product it referenced in the document.
        """
        product_rows = [_parse_product(row) for row in document.get("products") or []]
        sale_rows = [_parse_sale(row) for row in document.get("sales") or []]

        known_ids = [old_id for old_id, _ in product_rows]
        if len(set(known_ids)) != len(known_ids):
            raise ValidationError("products contain duplicate id values")
        for sale in sale_rows:
            if sale.product_id not in known_ids:
                raise ValidationError(f"sale references unknown product_id {sale.product_id}")

        with self._storage.unit_of_work() as db:
            existing = db.execute(select(func.count(Product.id))).scalar_one()
            existing += db.execute(select(func.count(Sale.id))).scalar_one()
            if existing and not replace:
                raise ValidationError("Store is not empty; clear it first or import with replace")
            if replace:
                db.execute(delete(Sale))
                db.execute(delete(Product))
                self._storage.reset_sequences(db)

            id_map = {}
            for old_id, product in product_rows:
                db.add(product)
                db.flush()
                id_map[old_id] = product.id
            for sale in sale_rows:
                sale.product_id = id_map[sale.product_id]
                db.add(sale)
            db.flush()

        logger.info(
            "Database imported: %s products, %s sales (replace=%s)",
            len(product_rows),
            len(sale_rows),
            replace,
        )
        return {"products": len(product_rows), "sales": len(sale_rows), "replaced": replace}


def _parse_product(row) -> tuple[int, Product]:
    now = utc_now()
    created_at = to_datetime(row.get("created_at"), "created_at", required=False) or now
    product = Product(
        name=to_str(row.get("name"), "name"),
        purchase_price=to_money(row.get("purchase_price"), "purchase_price"),
        selling_price=to_money(row.get("selling_price"), "selling_price"),
        stock=to_count(row.get("stock"), "stock"),
        min_stock=to_count(row.get("min_stock"), "min_stock", required=False),
        total_sold=to_count(row.get("total_sold"), "total_sold", required=False) or 0,
        date_added=to_datetime(row.get("date_added"), "date_added", required=False) or created_at,
        created_at=created_at,
        updated_at=to_datetime(row.get("updated_at"), "updated_at", required=False) or created_at,
    )
    if product.min_stock is None:
        product.min_stock = DEFAULT_MIN_STOCK
    return to_int(row.get("id"), "id"), product


def _parse_sale(row) -> Sale:
    quantity = to_int(row.get("quantity"), "quantity")
    if quantity <= 0:
        raise ValidationError("quantity must be a positive integer")
    sale_price = to_money(row.get("sale_price"), "sale_price")
    purchase_price = to_money(row.get("purchase_price"), "purchase_price")
    amounts = compute_sale_amounts(quantity, sale_price, purchase_price)

    total = row.get("total")
    if total is not None and to_money(total, "total") != amounts.total:
        raise ValidationError("sale total does not match quantity x sale_price")
    profit = row.get("profit")
    if profit is not None and to_money(profit, "profit", allow_negative=True) != amounts.profit:
        raise ValidationError("sale profit does not match quantity x (sale_price - purchase_price)")

    return Sale(
        product_id=to_int(row.get("product_id"), "product_id"),
        product_name=to_str(row.get("product_name"), "product_name"),
        quantity=quantity,
        sale_price=sale_price,
        purchase_price=purchase_price,
        total=amounts.total,
        profit=amounts.profit,
        sale_date=to_date(row.get("sale_date"), "sale_date"),
        customer_name=to_str(row.get("customer_name"), "customer_name", required=False)
        or WALK_IN_CUSTOMER,
        created_at=to_datetime(row.get("created_at"), "created_at", required=False) or utc_now(),
    )


__all__ = ["DataService"]
