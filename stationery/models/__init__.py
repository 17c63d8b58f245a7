import importlib

from stationery.models.product import Product
from stationery.models.sale import Sale


def import_all_models() -> None:
    for module_name in (
        "stationery.models.product",
        "stationery.models.sale",
    ):
        importlib.import_module(module_name)


__all__ = ["Product", "Sale", "import_all_models"]
