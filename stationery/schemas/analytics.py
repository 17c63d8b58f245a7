from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stationery.schemas.common import Money


class AnalyticsRead(BaseModel):
    total_products: int
    total_sales: Money
    total_profit: Money
    low_stock_items: int
    today_sales: Money
    today_profit: Money
    week_sales: Money
    month_sales: Money

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
