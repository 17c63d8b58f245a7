from stationery.services.analytics_service import AnalyticsAggregator
from stationery.services.data_service import DataService
from stationery.services.sale_service import SaleCoordinator

__all__ = ["AnalyticsAggregator", "DataService", "SaleCoordinator"]
