"""Pytest configuration for the budget API tests.

Points DATABASE_URL at a throwaway SQLite file before `budget_app` is
imported, since the engine is created at import time.
"""

import os
import tempfile
from pathlib import Path

import pytest

_DB_DIR = Path(tempfile.mkdtemp(prefix="budget-app-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR / 'budget_app.db'}"

from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, select  # noqa: E402

from budget_app.database import engine, init_db  # noqa: E402
from budget_app.main import app  # noqa: E402
from budget_app.models.budget_entry import BudgetEntry  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db():
    init_db()
    yield
    with Session(engine) as session:
        for entry in session.exec(select(BudgetEntry)).all():
            session.delete(entry)
        session.commit()


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
