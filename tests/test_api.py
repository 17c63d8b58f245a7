import unittest

from fastapi.testclient import TestClient

from stationery.config import Settings
from stationery.database.storage import Storage
from stationery.main import create_app


def _settings():
    return Settings(DATABASE_URL="sqlite:///:memory:", BUSINESS_TZ="utc", _env_file=None)


class ApiTest(unittest.TestCase):
    def setUp(self):
        settings = _settings()
        self.app = create_app(settings=settings, storage=Storage(settings.DATABASE_URL))
        self.client = TestClient(self.app)
        self.client.__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)

    def _add_pen(self, stock=10):
        response = self.client.post(
            "/api/products",
            json={
                "name": "Pen",
                "purchase_price": 2.5,
                "selling_price": 5.0,
                "stock": stock,
                "min_stock": 5,
            },
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertTrue(body["database_ready"])

    def test_product_lifecycle(self):
        pen = self._add_pen()
        self.assertEqual(pen["stock"], 10)
        self.assertEqual(pen["total_sold"], 0)
        self.assertEqual(pen["selling_price"], 5.0)

        listed = self.client.get("/api/products").json()
        self.assertEqual([item["id"] for item in listed], [pen["id"]])

        response = self.client.put(f"/api/products/{pen['id']}/stock", json={"stock": 4, "total_sold": 6})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["stock"], 4)

        response = self.client.delete(f"/api/products/{pen['id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["removed_sales"], 0)
        self.assertEqual(self.client.get(f"/api/products/{pen['id']}").status_code, 404)

    def test_add_product_validation(self):
        response = self.client.post("/api/products", json={"name": "Pen", "purchase_price": 1})
        self.assertEqual(response.status_code, 400)
        self.assertIn("required", response.json()["error"])

        response = self.client.post(
            "/api/products",
            json={"name": "Pen", "purchase_price": -1, "selling_price": 2, "stock": 1},
        )
        self.assertEqual(response.status_code, 400)

    def test_out_of_range_numbers_are_rejected(self):
        cases = [
            {"name": "Pen", "purchase_price": "1e30", "selling_price": 2, "stock": 1},
            {"name": "Pen", "purchase_price": 1, "selling_price": 2, "stock": 10**20},
        ]
        for payload in cases:
            with self.subTest(payload=payload):
                response = self.client.post("/api/products", json=payload)
                self.assertEqual(response.status_code, 400, response.text)
                self.assertIn("out of range", response.json()["error"])
        self.assertEqual(self.client.get("/api/products").json(), [])

    def test_missing_product_routes(self):
        self.assertEqual(self.client.put("/api/products/99/stock", json={"stock": 1}).status_code, 404)
        self.assertEqual(self.client.delete("/api/products/99").status_code, 404)

    def test_record_sale_and_analytics(self):
        pen = self._add_pen()

        response = self.client.post(
            "/api/sales",
            json={"product_id": pen["id"], "quantity": 3, "sale_date": "2025-01-10"},
        )
        self.assertEqual(response.status_code, 200, response.text)
        sale = response.json()
        self.assertEqual(sale["total"], 15.0)
        self.assertEqual(sale["profit"], 7.5)
        self.assertEqual(sale["customer_name"], "Walk-in Customer")

        response = self.client.post(
            "/api/sales",
            json={"product_id": pen["id"], "quantity": 20, "sale_date": "2025-01-11"},
        )
        self.assertEqual(response.status_code, 409)
        body = response.json()
        self.assertEqual(body["available"], 7)
        self.assertEqual(body["requested"], 20)

        sales = self.client.get("/api/sales").json()
        self.assertEqual(len(sales), 1)

        analytics = self.client.get("/api/analytics").json()
        self.assertEqual(analytics["totalProducts"], 1)
        self.assertEqual(analytics["totalSales"], 15.0)
        self.assertEqual(analytics["totalProfit"], 7.5)
        self.assertEqual(analytics["lowStockItems"], 0)
        for key in ("todaySales", "todayProfit", "weekSales", "monthSales"):
            self.assertIn(key, analytics)

    def test_record_sale_errors(self):
        response = self.client.post("/api/sales", json={"quantity": 1, "sale_date": "2025-01-10"})
        self.assertEqual(response.status_code, 400)

        response = self.client.post(
            "/api/sales",
            json={"product_id": 404, "quantity": 1, "sale_date": "2025-01-10"},
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["entity"], "product")

    def test_status_export_import_and_clear(self):
        pen = self._add_pen()
        self.client.post(
            "/api/sales",
            json={"product_id": pen["id"], "quantity": 2, "sale_date": "2025-01-10"},
        )

        status = self.client.get("/api/status").json()
        self.assertEqual((status["products"], status["sales"]), (1, 1))

        exported = self.client.get("/api/export").json()
        self.assertEqual(exported["version"], "2.0")
        self.assertEqual(len(exported["products"]), 1)

        workbook = self.client.get("/api/export/xlsx")
        self.assertEqual(workbook.status_code, 200)
        self.assertTrue(workbook.content.startswith(b"PK"))

        self.assertEqual(self.client.post("/api/import", json=exported).status_code, 400)
        response = self.client.post("/api/import", params={"replace": "true"}, json=exported)
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["sales"], 1)

        response = self.client.delete("/api/clear-all")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["products"], 1)
        self.assertEqual(self.client.get("/api/products").json(), [])


class NotReadyApiTest(unittest.TestCase):
    def test_requests_before_startup_get_503(self):
        settings = _settings()
        app = create_app(settings=settings, storage=Storage(settings.DATABASE_URL))
        # Without entering the client context the lifespan never initializes storage.
        client = TestClient(app)

        response = client.get("/api/products")

        self.assertEqual(response.status_code, 503)
        self.assertIn("not initialized", response.json()["error"])
        self.assertEqual(client.get("/health").json()["status"], "starting")


class ApplicationModuleTest(unittest.TestCase):
    def test_import_builds_no_application(self):
        import stationery.main as main_module

        self.assertFalse(hasattr(main_module, "app"))
        self.assertTrue(callable(main_module.create_app))


if __name__ == "__main__":
    unittest.main()
