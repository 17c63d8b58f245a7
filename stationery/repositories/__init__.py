from stationery.repositories.products import ProductRepository
from stationery.repositories.sales import SaleLedger

__all__ = ["ProductRepository", "SaleLedger"]
