from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field as PydanticField

from ..config import settings
from ..core.classifier import BudgetInput, can_edit_wants, classify, fifty_thirty_twenty
from ..core.coaching import coaching_messages


router = APIRouter(
    prefix="/api",
    tags=["planner"],
)


class ClassifyRequest(BaseModel):
    """Raw form values; anything unparseable is read as 0."""

    model_config = ConfigDict(populate_by_name=True)

    starting_balance: Any = PydanticField(default=None, alias="startingBalance")
    weekly_income: Any = PydanticField(default=None, alias="weeklyIncome")
    baseline: Any = None
    buffer_goal_weeks: Any = PydanticField(default=None, alias="bufferGoalWeeks")
    needs: Optional[Dict[str, Any]] = None
    wants: Optional[Dict[str, Any]] = None
    savings: Optional[Dict[str, Any]] = None


class LegacySubmitRequest(BaseModel):
    income: Any = None
    needs: Any = None
    wants: Any = None
    savings: Any = None


@router.post("/classify", status_code=status.HTTP_200_OK)
def classify_budget(payload: ClassifyRequest) -> Dict[str, Any]:
    """Classify a submission into survival/stable/growth and suggest targets."""
    try:
        data = BudgetInput.from_form(
            starting_balance=payload.starting_balance,
            weekly_income=payload.weekly_income,
            baseline=payload.baseline,
            buffer_goal_weeks=payload.buffer_goal_weeks,
            needs=payload.needs,
            wants=payload.wants,
            savings=payload.savings,
            default_buffer_goal_weeks=settings.default_buffer_goal_weeks,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    result = classify(data)
    body = result.to_dict()
    body["canEditWants"] = can_edit_wants(result.mode)
    body["shares"] = result.shares()
    body["coaching"] = coaching_messages(result)
    return body


@router.post("/submit", status_code=status.HTTP_200_OK)
def submit_fifty_thirty_twenty(payload: LegacySubmitRequest) -> Dict[str, Any]:
    """Fixed 50/30/20 comparison, kept for older clients."""
    return fifty_thirty_twenty(payload.income, payload.needs, payload.wants, payload.savings)
