from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from stationery.core.constants import MONTH_WINDOW_DAYS, WEEK_WINDOW_DAYS
from stationery.core.dates import business_today
from stationery.core.errors import ValidationError
from stationery.database.storage import Storage
from stationery.models.product import Product
from stationery.models.sale import Sale

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class MetricContext:
    db: Session
    today: date


def _window_start(today: date, days: int) -> date:
    return today - timedelta(days=days - 1)


def _sum(ctx: MetricContext, column, *criteria) -> Decimal:
    stmt = select(func.coalesce(func.sum(column), 0))
    if criteria:
        stmt = stmt.where(*criteria)
    value = ctx.db.execute(stmt).scalar_one()
    return Decimal(str(value)).quantize(ZERO) if value is not None else ZERO


def total_products(ctx: MetricContext) -> int:
    return ctx.db.execute(select(func.count(Product.id))).scalar_one()


def total_sales(ctx: MetricContext) -> Decimal:
    return _sum(ctx, Sale.total)


def total_profit(ctx: MetricContext) -> Decimal:
    return _sum(ctx, Sale.profit)


def low_stock_items(ctx: MetricContext) -> int:
    return ctx.db.execute(
        select(func.count(Product.id)).where(Product.stock <= Product.min_stock)
    ).scalar_one()


def today_sales(ctx: MetricContext) -> Decimal:
    return _sum(ctx, Sale.total, Sale.sale_date == ctx.today)


def today_profit(ctx: MetricContext) -> Decimal:
    return _sum(ctx, Sale.profit, Sale.sale_date == ctx.today)


def week_sales(ctx: MetricContext) -> Decimal:
    return _sum(
        ctx,
        Sale.total,
        Sale.sale_date >= _window_start(ctx.today, WEEK_WINDOW_DAYS),
        Sale.sale_date <= ctx.today,
    )


def month_sales(ctx: MetricContext) -> Decimal:
    return _sum(
        ctx,
        Sale.total,
        Sale.sale_date >= _window_start(ctx.today, MONTH_WINDOW_DAYS),
        Sale.sale_date <= ctx.today,
    )


METRICS: dict[str, Callable[[MetricContext], object]] = {
    "total_products": total_products,
    "total_sales": total_sales,
    "total_profit": total_profit,
    "low_stock_items": low_stock_items,
    "today_sales": today_sales,
    "today_profit": today_profit,
    "week_sales": week_sales,
    "month_sales": month_sales,
}


class AnalyticsAggregator:
    """Read-only business metrics over the product and sale tables.

    Metrics are computed in one read; a storage fault in any of them fails the
    whole request rather than returning a partial set.
    """

    def __init__(self, storage: Storage, timezone_mode: str = "local"):
        self._storage = storage
        self._timezone_mode = timezone_mode

    def today(self) -> date:
        return business_today(self._timezone_mode)

    def compute(self, names: Optional[list[str]] = None, *, today: Optional[date] = None) -> dict:
        selected = list(METRICS) if not names else names
        unknown = [name for name in selected if name not in METRICS]
        if unknown:
            raise ValidationError("Unknown metric(s): {}".format(", ".join(unknown)))

        today = today or self.today()
        with self._storage.unit_of_work(read_only=True) as db:
            ctx = MetricContext(db=db, today=today)
            return {name: METRICS[name](ctx) for name in selected}

    def metric(self, name: str, *, today: Optional[date] = None):
        return self.compute([name], today=today)[name]


__all__ = ["METRICS", "AnalyticsAggregator", "MetricContext"]
