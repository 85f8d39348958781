"""
Budget classification: spending mode plus suggested vs. actual allocations.

Everything here is pure and deterministic; callers build a `BudgetInput`
and get back a `ClassificationResult` that can be rendered as JSON.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .categories import (
    NEEDS_CATEGORIES,
    SAVINGS_CATEGORIES,
    WANTS_CATEGORIES,
    check_amount,
    normalize_breakdown,
    parse_amount,
    zero_breakdown,
)

DEFAULT_BUFFER_GOAL_WEEKS = 4.0

SURVIVAL_THRESHOLD = 0.9
GROWTH_THRESHOLD = 1.1

# Needs targets as fractions of the needs total; sums to 1.
NEEDS_SPLIT: Dict[str, float] = {
    "food": 0.25,
    "rent": 0.40,
    "utilities": 0.15,
    "transportation": 0.10,
    "health": 0.05,
    "insurance": 0.05,
}

# How excess income above baseline is divided in growth mode.
EXCESS_NEEDS_SHARE = 0.5
EXCESS_WANTS_SHARE = 0.3
EXCESS_SAVINGS_SHARE = 0.2

WANTS_SPLIT: Dict[str, float] = {key: 0.2 for key in WANTS_CATEGORIES}

SAVINGS_SPLIT_FILLING: Dict[str, float] = {
    "emergency": 0.5,
    "retirement": 0.0,
    "investments": 0.0,
    "goals": 0.0,
}
SAVINGS_SPLIT_FUNDED: Dict[str, float] = {key: 0.25 for key in SAVINGS_CATEGORIES}


class Mode(str, Enum):
    """Financial-health mode derived from income vs. baseline."""

    SURVIVAL = "survival"
    STABLE = "stable"
    GROWTH = "growth"


@dataclass(frozen=True)
class BudgetInput:
    """Immutable snapshot of one form submission."""

    starting_balance: float = 0.0
    weekly_income: float = 0.0
    baseline: float = 0.0
    buffer_goal_weeks: float = DEFAULT_BUFFER_GOAL_WEEKS
    needs_breakdown: Mapping[str, float] = field(default_factory=dict)
    wants_breakdown: Mapping[str, float] = field(default_factory=dict)
    savings_breakdown: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("starting_balance", "weekly_income", "baseline"):
            object.__setattr__(self, name, check_amount(name, getattr(self, name)))

        weeks = check_amount("buffer_goal_weeks", self.buffer_goal_weeks)
        if weeks <= 0:
            raise ValueError(f"buffer_goal_weeks must be positive, got {weeks!r}")
        object.__setattr__(self, "buffer_goal_weeks", weeks)

        for group in ("needs", "wants", "savings"):
            attr = f"{group}_breakdown"
            normalized = normalize_breakdown(group, getattr(self, attr))
            object.__setattr__(self, attr, MappingProxyType(normalized))

    @classmethod
    def from_form(
        cls,
        *,
        starting_balance: Any = None,
        weekly_income: Any = None,
        baseline: Any = None,
        buffer_goal_weeks: Any = None,
        needs: Optional[Mapping[str, Any]] = None,
        wants: Optional[Mapping[str, Any]] = None,
        savings: Optional[Mapping[str, Any]] = None,
        default_buffer_goal_weeks: float = DEFAULT_BUFFER_GOAL_WEEKS,
    ) -> "BudgetInput":
        """
        Build an input from raw form values.

        Unparseable or negative amounts become 0; a missing or non-positive
        buffer goal falls back to `default_buffer_goal_weeks`. Unknown
        category keys and amounts above MAX_AMOUNT still raise ValueError.
        """
        weeks = parse_amount(buffer_goal_weeks)
        if weeks <= 0:
            weeks = default_buffer_goal_weeks
        return cls(
            starting_balance=parse_amount(starting_balance),
            weekly_income=parse_amount(weekly_income),
            baseline=parse_amount(baseline),
            buffer_goal_weeks=weeks,
            needs_breakdown=normalize_breakdown("needs", needs, lenient=True),
            wants_breakdown=normalize_breakdown("wants", wants, lenient=True),
            savings_breakdown=normalize_breakdown("savings", savings, lenient=True),
        )


@dataclass(frozen=True)
class Allocation:
    needs_total: float
    needs_breakdown: Mapping[str, float]
    wants_total: float
    wants_breakdown: Mapping[str, float]
    savings_total: float
    savings_breakdown: Mapping[str, float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "needsTotal": self.needs_total,
            "needsBreakdown": dict(self.needs_breakdown),
            "wantsTotal": self.wants_total,
            "wantsBreakdown": dict(self.wants_breakdown),
            "savingsTotal": self.savings_total,
            "savingsBreakdown": dict(self.savings_breakdown),
        }


@dataclass(frozen=True)
class Comparison:
    needs_diff: float
    wants_diff: float
    savings_diff: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "needsDiff": self.needs_diff,
            "wantsDiff": self.wants_diff,
            "savingsDiff": self.savings_diff,
        }


@dataclass(frozen=True)
class ClassificationResult:
    mode: Mode
    weekly_income: float
    excess: float
    buffer_goal: float
    is_buffer_filling: bool
    suggested: Allocation
    actual: Allocation
    comparison: Comparison

    def shares(self) -> Dict[str, float]:
        """Actual group totals as percentages of weekly income."""
        return {
            "needs": percent_of(self.actual.needs_total, self.weekly_income),
            "wants": percent_of(self.actual.wants_total, self.weekly_income),
            "savings": percent_of(self.actual.savings_total, self.weekly_income),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "excess": self.excess,
            "bufferGoal": self.buffer_goal,
            "isBufferFilling": self.is_buffer_filling,
            "suggested": self.suggested.to_dict(),
            "actual": self.actual.to_dict(),
            "comparison": self.comparison.to_dict(),
        }


def determine_mode(weekly_income: float, baseline: float) -> Mode:
    """Both threshold boundaries belong to the stable band."""
    if weekly_income < baseline * SURVIVAL_THRESHOLD:
        return Mode.SURVIVAL
    if weekly_income <= baseline * GROWTH_THRESHOLD:
        return Mode.STABLE
    return Mode.GROWTH


def can_edit_wants(mode: Mode) -> bool:
    """Wants spending is only unlocked once income clears the stable band."""
    return Mode(mode) is Mode.GROWTH


def percent_of(part: float, total: float) -> float:
    """Return `part` as a percentage of `total`, or 0 when total is 0."""
    if not total or not math.isfinite(total):
        return 0.0
    return part / total * 100


def _split(amount: float, fractions: Mapping[str, float]) -> Dict[str, float]:
    return {key: amount * fraction for key, fraction in fractions.items()}


def _suggested_allocation(data: BudgetInput, mode: Mode, excess: float, is_buffer_filling: bool) -> Allocation:
    if mode is not Mode.GROWTH:
        return Allocation(
            needs_total=data.weekly_income,
            needs_breakdown=_split(data.weekly_income, NEEDS_SPLIT),
            wants_total=0.0,
            wants_breakdown=zero_breakdown("wants"),
            savings_total=0.0,
            savings_breakdown=zero_breakdown("savings"),
        )

    excess_needs = excess * EXCESS_NEEDS_SHARE
    wants_total = excess * EXCESS_WANTS_SHARE
    savings_total = excess * EXCESS_SAVINGS_SHARE

    baseline_part = _split(data.baseline, NEEDS_SPLIT)
    excess_part = _split(excess_needs, NEEDS_SPLIT)
    needs_breakdown = {key: baseline_part[key] + excess_part[key] for key in NEEDS_CATEGORIES}

    savings_split = SAVINGS_SPLIT_FILLING if is_buffer_filling else SAVINGS_SPLIT_FUNDED

    return Allocation(
        needs_total=data.baseline + excess_needs,
        needs_breakdown=needs_breakdown,
        wants_total=wants_total,
        wants_breakdown=_split(wants_total, WANTS_SPLIT),
        savings_total=savings_total,
        savings_breakdown=_split(savings_total, savings_split),
    )


def _actual_allocation(data: BudgetInput, mode: Mode) -> Allocation:
    if can_edit_wants(mode):
        wants_breakdown = dict(data.wants_breakdown)
    else:
        # Wants are locked outside growth mode; inputs are ignored.
        wants_breakdown = zero_breakdown("wants")

    return Allocation(
        needs_total=float(sum(data.needs_breakdown.values())),
        needs_breakdown=dict(data.needs_breakdown),
        wants_total=float(sum(wants_breakdown.values())),
        wants_breakdown=wants_breakdown,
        savings_total=float(sum(data.savings_breakdown.values())),
        savings_breakdown=dict(data.savings_breakdown),
    )


def classify(data: BudgetInput) -> ClassificationResult:
    """
    Classify a submission and diff actual spend against the mode's targets.

    Args:
        data: BudgetInput with non-negative amounts and normalized breakdowns.
    Returns:
        ClassificationResult with unrounded floats; presentation rounding is
        left to the caller.
    """
    mode = determine_mode(data.weekly_income, data.baseline)
    excess = max(0.0, data.weekly_income - data.baseline)
    buffer_goal = data.baseline * data.buffer_goal_weeks
    is_buffer_filling = data.starting_balance < buffer_goal

    suggested = _suggested_allocation(data, mode, excess, is_buffer_filling)
    actual = _actual_allocation(data, mode)
    comparison = Comparison(
        needs_diff=actual.needs_total - suggested.needs_total,
        wants_diff=actual.wants_total - suggested.wants_total,
        savings_diff=actual.savings_total - suggested.savings_total,
    )

    return ClassificationResult(
        mode=mode,
        weekly_income=data.weekly_income,
        excess=excess,
        buffer_goal=buffer_goal,
        is_buffer_filling=is_buffer_filling,
        suggested=suggested,
        actual=actual,
        comparison=comparison,
    )


def fifty_thirty_twenty(income: Any, needs: Any, wants: Any, savings: Any) -> Dict[str, Dict[str, float]]:
    """Legacy fixed 50/30/20 split of income against three spend totals."""
    income_amount = parse_amount(income)
    suggested = {
        "needs": income_amount * 0.5,
        "wants": income_amount * 0.3,
        "savings": income_amount * 0.2,
    }
    actual = {
        "needs": parse_amount(needs),
        "wants": parse_amount(wants),
        "savings": parse_amount(savings),
    }
    return {
        "suggested": suggested,
        "actual": actual,
        "comparison": {
            "needsDiff": actual["needs"] - suggested["needs"],
            "wantsDiff": actual["wants"] - suggested["wants"],
            "savingsDiff": actual["savings"] - suggested["savings"],
        },
    }
