from stationery.database.base import Base
from stationery.database.engine import build_engine
from stationery.database.storage import InitResult, Storage

__all__ = ["Base", "InitResult", "Storage", "build_engine"]
