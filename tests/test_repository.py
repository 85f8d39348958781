from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from pathlib import Path

from sqlmodel import Session, SQLModel, create_engine

from budget_app.models.budget_entry import BudgetEntry
from budget_app.repository import BudgetEntryRepository


def _engine(tmp_path: Path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'repo.db'}",
        connect_args={"check_same_thread": False},
    )
    SQLModel.metadata.create_all(engine)
    return engine


def _entry(day: int, income: float = 500.0) -> BudgetEntry:
    return BudgetEntry(
        budget_date=date(2026, 10, day),
        income=income,
        needs_data={"rent": 200.0},
        wants_data={"dining": 30.0},
        savings_data={},
    )


def test_save_assigns_id_and_round_trips_json(tmp_path: Path) -> None:
    engine = _engine(tmp_path)

    with Session(engine) as session:
        saved = BudgetEntryRepository(session).save(_entry(1))

    assert saved.id is not None

    with Session(engine) as session:
        restored = session.get(BudgetEntry, saved.id)

    assert restored is not None
    assert restored.needs_data == {"rent": 200.0}
    assert restored.wants_data == {"dining": 30.0}
    assert restored.total_money == 0
    assert restored.notes is None
    created_at = restored.created_at.replace(tzinfo=timezone.utc)
    assert abs(created_at - datetime.now(timezone.utc)) < timedelta(minutes=5)
    engine.dispose()


def test_list_orders_newest_date_first(tmp_path: Path) -> None:
    engine = _engine(tmp_path)

    with Session(engine) as session:
        repo = BudgetEntryRepository(session)
        repo.save(_entry(3))
        repo.save(_entry(12))
        repo.save(_entry(7))
        listed = repo.list()

    assert [entry.budget_date.day for entry in listed] == [12, 7, 3]
    engine.dispose()


def test_delete_reports_whether_a_row_was_removed(tmp_path: Path) -> None:
    engine = _engine(tmp_path)

    with Session(engine) as session:
        repo = BudgetEntryRepository(session)
        saved = repo.save(_entry(5))

        assert repo.delete(saved.id) is True
        assert repo.delete(saved.id) is False
        assert repo.list() == []
    engine.dispose()
