import argparse
import sys
from datetime import date
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from stationery.config import get_settings
from stationery.core.errors import StationeryError
from stationery.core.logging import setup_logging
from stationery.database.storage import Storage
from stationery.repositories.products import ProductRepository
from stationery.services.data_service import DataService
from stationery.services.sale_service import SaleCoordinator

SAMPLE_PRODUCTS = [
    ("Ballpoint Pen (Blue)", "2.50", "5.00", 100, 10),
    ("Ballpoint Pen (Black)", "2.50", "5.00", 80, 10),
    ("Ballpoint Pen (Red)", "2.50", "5.00", 60, 10),
    ("A4 Notebook (200 pages)", "15.00", "25.00", 50, 5),
    ("A4 Notebook (100 pages)", "8.00", "15.00", 75, 8),
    ("Pencil HB", "1.50", "3.00", 120, 15),
    ("Eraser", "1.00", "2.50", 90, 10),
    ("Ruler (30cm)", "3.00", "6.00", 40, 5),
    ("Highlighter (Yellow)", "4.00", "8.00", 35, 5),
    ("Highlighter (Pink)", "4.00", "8.00", 30, 5),
    ("Stapler", "12.00", "22.00", 25, 3),
    ("Stapler Pins (Box)", "2.00", "4.50", 60, 8),
    ("A4 Paper (500 sheets)", "8.00", "15.00", 45, 5),
    ("Correction Tape", "5.50", "10.00", 40, 5),
    ("Permanent Marker (Black)", "6.00", "12.00", 25, 3),
    ("Glue Stick", "3.50", "7.00", 55, 8),
    ("Calculator", "25.00", "45.00", 15, 2),
    ("File Folder", "2.00", "4.00", 70, 10),
    ("Spiral Notebook", "6.00", "12.00", 40, 5),
    ("Scissors", "8.00", "15.00", 20, 3),
]

# (index into SAMPLE_PRODUCTS, quantity, sale date, customer)
SAMPLE_SALES = [
    (0, 5, date(2025, 8, 20), "John Doe"),
    (1, 3, date(2025, 8, 20), "Jane Smith"),
    (3, 2, date(2025, 8, 19), None),
    (5, 8, date(2025, 8, 19), "School Purchase"),
    (0, 10, date(2025, 8, 18), "Office Supply"),
    (12, 1, date(2025, 8, 18), "Maria Garcia"),
    (6, 4, date(2025, 8, 17), None),
    (8, 2, date(2025, 8, 17), "Student Purchase"),
]


def parse_args():
    parser = argparse.ArgumentParser(description="Seed the sample stationery catalog.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    parser.add_argument(
        "--no-sales",
        action="store_true",
        help="Only seed products.",
    )
    return parser.parse_args()


def seed(storage, with_sales=True):
    products = ProductRepository(storage)
    if products.count():
        return None

    with storage.unit_of_work() as db:
        created = [
            products.add(name, purchase, selling, stock, min_stock=min_stock, db=db)
            for name, purchase, selling, stock, min_stock in SAMPLE_PRODUCTS
        ]

    sales = []
    if with_sales:
        coordinator = SaleCoordinator(storage, products=products)
        for index, quantity, sale_date, customer in SAMPLE_SALES:
            sales.append(
                coordinator.record_sale(created[index].id, quantity, sale_date, customer_name=customer)
            )
    return created, sales


def main():
    setup_logging()
    args = parse_args()

    storage = Storage.from_settings(get_settings())
    result = storage.initialize()
    if not result.ok:
        raise SystemExit(f"Database initialization failed: {result.error}")

    try:
        if args.reset:
            DataService(storage).clear_all()
        seeded = seed(storage, with_sales=not args.no_sales)
    except StationeryError as exc:
        raise SystemExit(f"Seed failed: {exc}") from exc
    finally:
        storage.dispose()

    if seeded is None:
        print("Seed skipped: products already exist. Use --reset to re-seed.")
        return
    created, sales = seeded
    print(f"Seed data created: {len(created)} products, {len(sales)} sales.")


if __name__ == "__main__":
    main()
