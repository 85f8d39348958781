"""Budget entry data access helpers."""

from __future__ import annotations

from typing import List

from sqlmodel import Session, select

from .models.budget_entry import BudgetEntry


class BudgetEntryRepository:
    """Thin repository that encapsulates persistence of budget entries."""

    def __init__(self, db: Session):
        self._db = db

    def save(self, entry: BudgetEntry) -> BudgetEntry:
        self._db.add(entry)
        self._db.commit()
        self._db.refresh(entry)
        return entry

    def list(self) -> List[BudgetEntry]:
        stmt = select(BudgetEntry).order_by(BudgetEntry.budget_date.desc(), BudgetEntry.id.desc())
        return list(self._db.exec(stmt).all())

    def delete(self, entry_id: int) -> bool:
        """Delete one entry; returns False when no row has that id."""
        entry = self._db.get(BudgetEntry, entry_id)
        if entry is None:
            return False
        self._db.delete(entry)
        self._db.commit()
        return True
