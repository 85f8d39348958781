from datetime import date, datetime, timezone
from typing import Dict, Optional

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BudgetEntry(SQLModel, table=True):
    __tablename__ = "budget_entries"

    id: Optional[int] = Field(default=None, primary_key=True)

    budget_date: date = Field(index=True)

    # Protected buffer the user started the period with
    total_money: float = Field(default=0)
    income: float

    # Raw category -> amount mappings, stored as submitted
    needs_data: Dict[str, float] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    wants_data: Dict[str, float] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    savings_data: Dict[str, float] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    notes: Optional[str] = Field(default=None)

    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
