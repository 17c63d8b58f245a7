from fastapi import Request

from stationery.config import Settings
from stationery.database.storage import Storage
from stationery.repositories.products import ProductRepository
from stationery.repositories.sales import SaleLedger
from stationery.services.analytics_service import AnalyticsAggregator
from stationery.services.data_service import DataService
from stationery.services.sale_service import SaleCoordinator


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_products(request: Request) -> ProductRepository:
    return ProductRepository(get_storage(request))


def get_ledger(request: Request) -> SaleLedger:
    return SaleLedger(get_storage(request))


def get_coordinator(request: Request) -> SaleCoordinator:
    return SaleCoordinator(get_storage(request))


def get_analytics(request: Request) -> AnalyticsAggregator:
    settings = get_settings_dep(request)
    return AnalyticsAggregator(get_storage(request), timezone_mode=settings.BUSINESS_TZ)


def get_data_service(request: Request) -> DataService:
    return DataService(get_storage(request))


__all__ = [
    "get_analytics",
    "get_coordinator",
    "get_data_service",
    "get_ledger",
    "get_products",
    "get_settings_dep",
    "get_storage",
]
