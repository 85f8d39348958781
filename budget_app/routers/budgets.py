import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field as PydanticField, ValidationInfo, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from ..core.categories import MAX_AMOUNT, normalize_breakdown
from ..database import get_session
from ..models.budget_entry import BudgetEntry
from ..repository import BudgetEntryRepository


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/budgets",
    tags=["budgets"],
)


# ─────────────────────────────
#   SCHEMAS
# ─────────────────────────────

class BudgetEntryCreate(BaseModel):
    """Request body in the shape the web form posts it."""

    model_config = ConfigDict(populate_by_name=True)

    budget_date: date
    total_money: float = PydanticField(default=0, ge=0, le=MAX_AMOUNT, allow_inf_nan=False, alias="totalMoney")
    paycheck: float = PydanticField(ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    needs: Dict[str, float]
    wants: Dict[str, float]
    savings: Dict[str, float]
    notes: Optional[str] = PydanticField(default=None, max_length=2000)

    @field_validator("needs", "wants", "savings")
    @classmethod
    def _known_categories(cls, value: Dict[str, float], info: ValidationInfo) -> Dict[str, float]:
        return normalize_breakdown(info.field_name, value)


class BudgetEntryCreated(SQLModel):
    success: bool
    id: int
    message: str


class BudgetEntryRead(SQLModel):
    id: int
    budget_date: date
    total_money: float
    income: float
    needs_data: Dict[str, float]
    wants_data: Dict[str, float]
    savings_data: Dict[str, float]
    notes: Optional[str] = None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive timestamps; they were written in UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


def _storage_error(session: Session, exc: SQLAlchemyError, action: str) -> HTTPException:
    session.rollback()
    logger.exception("Database error while %s budget entries", action)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Database error: {exc}",
    )


# ─────────────────────────────
#   ENDPOINTS
# ─────────────────────────────

@router.post(
    "",
    response_model=BudgetEntryCreated,
    status_code=status.HTTP_201_CREATED,
)
def create_budget_entry(
    payload: BudgetEntryCreate,
    session: Session = Depends(get_session),
):
    """
    Store a budget submission verbatim.

    - `paycheck` maps to the `income` column; breakdowns go to the JSON columns.
    - Raw wants are kept even when the classifier would lock them out.
    """
    entry = BudgetEntry(
        budget_date=payload.budget_date,
        total_money=payload.total_money,
        income=payload.paycheck,
        needs_data=payload.needs,
        wants_data=payload.wants,
        savings_data=payload.savings,
        notes=payload.notes or None,
    )

    try:
        entry = BudgetEntryRepository(session).save(entry)
    except SQLAlchemyError as exc:
        raise _storage_error(session, exc, "creating")

    logger.info("Created budget entry id=%s for %s", entry.id, entry.budget_date)
    return BudgetEntryCreated(success=True, id=entry.id, message="Budget entry created successfully")


@router.get(
    "",
    response_model=List[BudgetEntryRead],
    status_code=status.HTTP_200_OK,
)
def list_budget_entries(session: Session = Depends(get_session)) -> Any:
    """All entries, newest budget_date first."""
    try:
        return BudgetEntryRepository(session).list()
    except SQLAlchemyError as exc:
        raise _storage_error(session, exc, "listing")


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_budget_entry(
    entry_id: int,
    session: Session = Depends(get_session),
):
    try:
        deleted = BudgetEntryRepository(session).delete(entry_id)
    except SQLAlchemyError as exc:
        raise _storage_error(session, exc, "deleting")

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No budget entry with id {entry_id} exists",
        )
    logger.info("Deleted budget entry id=%s", entry_id)
    return None
