import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from stationery.config import get_settings
from stationery.core.errors import StationeryError
from stationery.core.logging import setup_logging
from stationery.database.storage import Storage
from stationery.schemas.data import ExportDocument
from stationery.services.data_service import DataService


def parse_args():
    parser = argparse.ArgumentParser(description="Export products and sales to a file.")
    parser.add_argument("--path", required=True, help="Output file (.json or .xlsx).")
    parser.add_argument(
        "--xlsx",
        action="store_true",
        help="Write an Excel workbook instead of JSON.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    storage = Storage.from_settings(get_settings())
    result = storage.initialize()
    if not result.ok:
        raise SystemExit(f"Database initialization failed: {result.error}")

    output = Path(args.path)
    data = DataService(storage)
    try:
        if args.xlsx:
            output.write_bytes(data.export_workbook())
        else:
            document = ExportDocument.model_validate(data.export())
            output.write_text(document.model_dump_json(indent=2), encoding="utf-8")
    except (OSError, StationeryError) as exc:
        raise SystemExit(f"Export failed: {exc}") from exc
    finally:
        storage.dispose()

    print(f"Export written to {output}")


if __name__ == "__main__":
    main()
