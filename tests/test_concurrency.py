import tempfile
import threading
import unittest
from pathlib import Path

from stationery.core.errors import InsufficientStockError
from stationery.database.storage import Storage
from stationery.repositories.products import ProductRepository
from stationery.repositories.sales import SaleLedger
from stationery.services.sale_service import SaleCoordinator


class ConcurrentSaleTest(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        db_path = Path(self._tmp.name) / "stationery.db"
        self.storage = Storage(f"sqlite:///{db_path}")
        self.assertTrue(self.storage.initialize().ok)
        self.products = ProductRepository(self.storage)

    def tearDown(self):
        self.storage.dispose()
        self._tmp.cleanup()

    def _race(self, product_id, quantities):
        barrier = threading.Barrier(len(quantities))
        outcomes = []
        lock = threading.Lock()

        def sell(quantity):
            coordinator = SaleCoordinator(self.storage)
            barrier.wait()
            try:
                coordinator.record_sale(product_id, quantity, "2025-01-10")
                outcome = "ok"
            except InsufficientStockError:
                outcome = "insufficient"
            except Exception as exc:  # surfaced through the assertion below
                outcome = repr(exc)
            with lock:
                outcomes.append(outcome)

        threads = [threading.Thread(target=sell, args=(quantity,)) for quantity in quantities]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=60)
        return sorted(outcomes)

    def test_only_one_sale_gets_the_last_units(self):
        product = self.products.add("Calculator", "25.00", "45.00", 5)

        for round_number in range(5):
            with self.subTest(round=round_number):
                self.products.update_stock(product.id, 5)
                before = self.products.get(product.id).total_sold

                outcomes = self._race(product.id, [5, 5])

                self.assertEqual(outcomes, ["insufficient", "ok"])
                after = self.products.get(product.id)
                self.assertEqual(after.stock, 0)
                self.assertEqual(after.total_sold, before + 5)

        self.assertEqual(SaleLedger(self.storage).count(), 5)

    def test_many_sellers_never_oversell(self):
        product = self.products.add("Stapler", "12.00", "22.00", 10)

        outcomes = self._race(product.id, [3] * 6)

        self.assertEqual(outcomes.count("ok"), 3)
        self.assertEqual(outcomes.count("insufficient"), 3)
        self.assertEqual(self.products.get(product.id).stock, 1)


if __name__ == "__main__":
    unittest.main()
