from typing import Optional, cast

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from stationery.database.storage import Storage
from stationery.models.sale import Sale


class SaleLedger:
    """Append-only store of sale records; amounts arrive already computed."""

    def __init__(self, storage: Storage):
        self._storage = storage

    def list(self, db: Optional[Session] = None) -> list[Sale]:
        with self._storage.unit_of_work(db, read_only=True) as session:
            sales = (
                session.execute(select(Sale).order_by(Sale.created_at.desc(), Sale.id.desc()))
                .scalars()
                .all()
            )
            return cast(list[Sale], list(sales))

    def count(self, db: Optional[Session] = None) -> int:
        with self._storage.unit_of_work(db, read_only=True) as session:
            return session.execute(select(func.count(Sale.id))).scalar_one()

    def insert(self, sale: Sale, db: Optional[Session] = None) -> Sale:
        with self._storage.unit_of_work(db) as session:
            session.add(sale)
            session.flush()
            return sale


__all__ = ["SaleLedger"]
