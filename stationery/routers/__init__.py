from stationery.routers.analytics import router as analytics_router
from stationery.routers.data import router as data_router
from stationery.routers.health import router as health_router
from stationery.routers.products import router as products_router
from stationery.routers.sales import router as sales_router

__all__ = [
    "analytics_router",
    "data_router",
    "health_router",
    "products_router",
    "sales_router",
]
