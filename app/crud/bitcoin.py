from typing import List, Optional
from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.bitcoin import Bitcoin

class CRUDBitcoin(CRUDBase[Bitcoin]):
    """Store of record for bitcoin prices.

    Listings are ordered by price descending with symbol as the tie-break,
    so equal prices always come back in the same order and the computed
    row-number rank matches each row's position.
    """

    def _ranking_order(self) -> list:
        return [self.table.c.price.desc(), self.table.c.symbol.asc()]

    def _returning(self) -> tuple:
        c = self.table.c
        return (c.symbol, c.price, c.created_at, c.updated_at)

    def get_multi_ordered(self, db: Session) -> List[Bitcoin]:
        return self.get_multi(db, order_by=self._ranking_order())

    def get_ranked(self, db: Session) -> List[Row]:
        rank = func.row_number().over(order_by=self._ranking_order()).label("rank")
        query = select(*self._returning(), rank).order_by(*self._ranking_order())
        return list(db.execute(query).all())

    def upsert(self, db: Session, *, symbol: str, price: int) -> Row:
        """Insert, or on symbol conflict update the price and refresh ``updated_at``.

        ``created_at`` is never touched on conflict.
        """
        if db.get_bind().dialect.name == "sqlite":
            insert = sqlite.insert
        else:
            insert = postgresql.insert

        stmt = insert(self.table).values(symbol=symbol, price=price)
        stmt = stmt.on_conflict_do_update(
            index_elements=[self.table.c.symbol],
            set_={"price": stmt.excluded.price, "updated_at": func.now()},
        ).returning(*self._returning())

        row = db.execute(stmt).one()
        db.commit()
        return row

    def delete(self, db: Session, *, symbol: str) -> Optional[Row]:
        stmt = (
            delete(self.table)
            .where(self.table.c.symbol == symbol)
            .returning(*self._returning())
        )
        row = db.execute(stmt).one_or_none()
        db.commit()
        return row

    def ping(self, db: Session) -> bool:
        db.execute(select(1))
        return True

bitcoin = CRUDBitcoin(Bitcoin)
