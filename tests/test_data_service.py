import io
import json
import unittest

from openpyxl import load_workbook

from stationery.core.errors import ValidationError
from stationery.database.storage import Storage
from stationery.repositories.products import ProductRepository
from stationery.repositories.sales import SaleLedger
from stationery.schemas.data import ExportDocument
from stationery.services.data_service import DataService
from stationery.services.sale_service import SaleCoordinator

PRODUCT_FIELDS = (
    "name",
    "purchase_price",
    "selling_price",
    "stock",
    "min_stock",
    "total_sold",
    "date_added",
    "created_at",
    "updated_at",
)
SALE_FIELDS = (
    "product_name",
    "quantity",
    "sale_price",
    "purchase_price",
    "total",
    "profit",
    "sale_date",
    "customer_name",
    "created_at",
)


def _seed(storage):
    products = ProductRepository(storage)
    coordinator = SaleCoordinator(storage)
    pen = products.add("Pen", "2.50", "5.00", 10)
    notebook = products.add("Notebook", "15.00", "25.00", 50, min_stock=5)
    coordinator.record_sale(pen.id, 3, "2025-08-20", customer_name="John Doe")
    coordinator.record_sale(notebook.id, 2, "2025-08-19")
    return pen, notebook


class DataServiceTest(unittest.TestCase):
    def setUp(self):
        self.storage = Storage("sqlite:///:memory:")
        self.assertTrue(self.storage.initialize().ok)
        self.data = DataService(self.storage)

    def tearDown(self):
        self.storage.dispose()

    def test_status_counts_records(self):
        _seed(self.storage)
        status = self.data.status()
        self.assertEqual(status["status"], "connected")
        self.assertEqual(status["database"], "sqlite")
        self.assertEqual((status["products"], status["sales"]), (2, 2))

    def test_export_contains_version_and_both_stores(self):
        _seed(self.storage)
        document = self.data.export()

        self.assertEqual(document["version"], "2.0")
        self.assertIsNotNone(document["export_date"])
        self.assertEqual([item.name for item in document["products"]], ["Pen", "Notebook"])
        self.assertEqual(len(document["sales"]), 2)

    def test_export_import_round_trip(self):
        _seed(self.storage)
        exported = json.loads(ExportDocument.model_validate(self.data.export()).model_dump_json())

        target = Storage("sqlite:///:memory:")
        self.assertTrue(target.initialize().ok)
        try:
            target_data = DataService(target)
            summary = target_data.import_data(exported)
            reimported = json.loads(
                ExportDocument.model_validate(target_data.export()).model_dump_json()
            )
        finally:
            target.dispose()

        self.assertEqual(summary, {"products": 2, "sales": 2, "replaced": False})
        for original, copy in zip(exported["products"], reimported["products"]):
            for field in PRODUCT_FIELDS:
                self.assertEqual(original[field], copy[field], field)
        for original, copy in zip(exported["sales"], reimported["sales"]):
            for field in SALE_FIELDS:
                self.assertEqual(original[field], copy[field], field)

        old_names = {item["id"]: item["name"] for item in exported["products"]}
        new_names = {item["id"]: item["name"] for item in reimported["products"]}
        for original, copy in zip(exported["sales"], reimported["sales"]):
            self.assertEqual(old_names[original["product_id"]], new_names[copy["product_id"]])

    def test_import_refuses_non_empty_store_without_replace(self):
        _seed(self.storage)
        document = json.loads(ExportDocument.model_validate(self.data.export()).model_dump_json())

        with self.assertRaises(ValidationError):
            self.data.import_data(document)

        summary = self.data.import_data(document, replace=True)
        self.assertTrue(summary["replaced"])
        products = ProductRepository(self.storage).list()
        self.assertEqual(sorted(item.id for item in products), [1, 2])

    def test_import_rejects_inconsistent_totals(self):
        document = {
            "products": [
                {"id": 7, "name": "Pen", "purchase_price": 2.5, "selling_price": 5, "stock": 3}
            ],
            "sales": [
                {
                    "product_id": 7,
                    "product_name": "Pen",
                    "quantity": 2,
                    "sale_price": 5,
                    "purchase_price": 2.5,
                    "total": 99,
                    "profit": 5,
                    "sale_date": "2025-01-10",
                }
            ],
        }
        with self.assertRaises(ValidationError):
            self.data.import_data(document)
        self.assertEqual(ProductRepository(self.storage).count(), 0)

    def test_import_rejects_unknown_product_reference(self):
        document = {
            "products": [],
            "sales": [
                {
                    "product_id": 3,
                    "product_name": "Pen",
                    "quantity": 1,
                    "sale_price": 5,
                    "purchase_price": 2.5,
                    "sale_date": "2025-01-10",
                }
            ],
        }
        with self.assertRaises(ValidationError):
            self.data.import_data(document)

    def test_clear_all_resets_identifiers(self):
        _seed(self.storage)

        counts = self.data.clear_all()

        self.assertEqual(counts, {"products": 2, "sales": 2})
        self.assertEqual(ProductRepository(self.storage).count(), 0)
        self.assertEqual(SaleLedger(self.storage).count(), 0)
        product = ProductRepository(self.storage).add("Ruler", "3.00", "6.00", 40)
        self.assertEqual(product.id, 1)

    def test_export_workbook_sheets(self):
        _seed(self.storage)

        workbook = load_workbook(io.BytesIO(self.data.export_workbook()))

        self.assertEqual(workbook.sheetnames, ["products", "sales", "meta"])
        products = list(workbook["products"].iter_rows(values_only=True))
        self.assertEqual(products[0][:2], ("id", "name"))
        self.assertEqual(len(products), 3)
        sales = list(workbook["sales"].iter_rows(values_only=True))
        self.assertEqual(len(sales), 3)
        meta = dict(workbook["meta"].iter_rows(values_only=True))
        self.assertEqual(meta["version"], "2.0")


if __name__ == "__main__":
    unittest.main()
