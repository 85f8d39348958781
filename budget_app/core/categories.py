"""Fixed category key sets and lenient amount parsing for budget forms."""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional, Tuple

NEEDS_CATEGORIES: Tuple[str, ...] = (
    "food",
    "rent",
    "utilities",
    "transportation",
    "health",
    "insurance",
)

WANTS_CATEGORIES: Tuple[str, ...] = (
    "dining",
    "entertainment",
    "shopping",
    "subscriptions",
    "travel",
)

# Largest amount accepted anywhere; keeps products like baseline x weeks finite.
MAX_AMOUNT = 1e12

SAVINGS_CATEGORIES: Tuple[str, ...] = (
    "emergency",
    "retirement",
    "investments",
    "goals",
)

CATEGORY_GROUPS: Dict[str, Tuple[str, ...]] = {
    "needs": NEEDS_CATEGORIES,
    "wants": WANTS_CATEGORIES,
    "savings": SAVINGS_CATEGORIES,
}


def parse_amount(value: Any) -> float:
    """
    Parse a user-typed amount, falling back to 0 instead of failing.

    None, blank strings, unparseable text, NaN/infinity and negative numbers
    all become 0.0 so the form stays computable.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def normalize_breakdown(group: str, raw: Optional[Mapping[str, Any]], *, lenient: bool = False) -> Dict[str, float]:
    """
    Return a breakdown holding every known key of `group`, in canonical order.

    Missing keys default to 0. Unknown keys raise ValueError. With
    `lenient=True` values go through `parse_amount`; otherwise they must
    already be finite, non-negative numbers.
    """
    if group not in CATEGORY_GROUPS:
        raise ValueError(f"Unknown category group '{group}'")
    keys = CATEGORY_GROUPS[group]
    raw = raw or {}

    unknown = sorted(set(raw) - set(keys))
    if unknown:
        raise ValueError(
            f"Unknown {group} categories: {', '.join(unknown)} (expected: {', '.join(keys)})"
        )

    normalized: Dict[str, float] = {}
    for key in keys:
        value = raw.get(key)
        if lenient:
            normalized[key] = parse_amount(value)
            continue
        if value is None:
            normalized[key] = 0.0
            continue
        normalized[key] = check_amount(f"{group}.{key}", value)
    return normalized


def zero_breakdown(group: str) -> Dict[str, float]:
    return {key: 0.0 for key in CATEGORY_GROUPS[group]}


def check_amount(name: str, value: Any) -> float:
    """Strict counterpart of `parse_amount`: bad amounts raise ValueError."""
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(amount) or amount < 0 or amount > MAX_AMOUNT:
        raise ValueError(f"{name} must be between 0 and {MAX_AMOUNT:,.0f}, got {value!r}")
    return amount
