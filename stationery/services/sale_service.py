"""Sale transaction coordinator.

Recording a sale reads one product, checks its stock, derives the money
fields and then writes a ledger row and the stock decrement. All of that runs
inside a single unit of work with the product row locked (``FOR UPDATE`` on
client-server engines, ``BEGIN IMMEDIATE`` on SQLite), so two sales of the
same product can never both pass the stock check on the same units.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from stationery.core.coerce import quantize_money, to_date, to_int, to_str
from stationery.core.constants import WALK_IN_CUSTOMER
from stationery.core.errors import InsufficientStockError, StorageError, ValidationError
from stationery.database.storage import Storage
from stationery.models.product import Product
from stationery.models.sale import Sale
from stationery.repositories.products import ProductRepository
from stationery.repositories.sales import SaleLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaleAmounts:
    total: Decimal
    profit: Decimal


def compute_sale_amounts(quantity: int, selling_price: Decimal, purchase_price: Decimal) -> SaleAmounts:
    return SaleAmounts(
        total=quantize_money(quantity * selling_price, "total"),
        profit=quantize_money(quantity * (selling_price - purchase_price), "profit"),
    )


@dataclass(frozen=True)
class SaleRequest:
    product_id: int
    quantity: int
    sale_date: date
    customer_name: str

    @classmethod
    def parse(cls, product_id, quantity, sale_date, customer_name=None) -> "SaleRequest":
        product_id = to_int(product_id, "product_id")
        quantity = to_int(quantity, "quantity")
        if quantity <= 0:
            raise ValidationError("quantity must be a positive integer")
        return cls(
            product_id=product_id,
            quantity=quantity,
            sale_date=to_date(sale_date, "sale_date"),
            customer_name=to_str(customer_name, "customer_name", required=False) or WALK_IN_CUSTOMER,
        )


class SaleCoordinator:
    def __init__(
        self,
        storage: Storage,
        products: Optional[ProductRepository] = None,
        ledger: Optional[SaleLedger] = None,
    ):
        self._storage = storage
        self._products = products or ProductRepository(storage)
        self._ledger = ledger or SaleLedger(storage)

    def record_sale(self, product_id, quantity, sale_date, customer_name=None) -> Sale:
        request = SaleRequest.parse(product_id, quantity, sale_date, customer_name)

        try:
            with self._storage.unit_of_work() as db:
                product = self._products.get(request.product_id, db=db, for_update=True)
                if product.stock < request.quantity:
                    logger.info(
                        "Sale rejected for product %s: requested %s, available %s",
                        product.id,
                        request.quantity,
                        product.stock,
                    )
                    raise InsufficientStockError(product.id, request.quantity, product.stock)

                sale = self._ledger.insert(build_sale(product, request), db=db)
                self._products.update_stock(
                    product.id,
                    product.stock - request.quantity,
                    product.total_sold + request.quantity,
                    db=db,
                )
        except StorageError as exc:
            logger.error(
                "Sale for product %s x%s not recorded: %s",
                request.product_id,
                request.quantity,
                exc.__cause__ or exc,
            )
            raise StorageError(
                "Storage failure, the sale was not recorded",
                product_id=request.product_id,
                quantity=request.quantity,
            ) from exc

        logger.info(
            "Sale recorded with ID: %s (product %s x%s, total %s)",
            sale.id,
            sale.product_id,
            sale.quantity,
            sale.total,
        )
        return sale


def build_sale(product: Product, request: SaleRequest) -> Sale:
    amounts = compute_sale_amounts(request.quantity, product.selling_price, product.purchase_price)
    return Sale(
        product_id=product.id,
        product_name=product.name,
        quantity=request.quantity,
        sale_price=product.selling_price,
        purchase_price=product.purchase_price,
        total=amounts.total,
        profit=amounts.profit,
        sale_date=request.sale_date,
        customer_name=request.customer_name,
    )


__all__ = ["SaleAmounts", "SaleCoordinator", "SaleRequest", "build_sale", "compute_sale_amounts"]
