from __future__ import annotations

from typing import List

from .classifier import ClassificationResult, Mode

# Overspend below a cent is float noise, not advice-worthy.
OVERSPEND_TOLERANCE = 0.01

MODE_HEADLINES = {
    Mode.SURVIVAL: (
        "Survival mode: this week's income is below your baseline. "
        "Cover essentials first and pause all wants spending."
    ),
    Mode.STABLE: (
        "Stable mode: income is close to your baseline. "
        "Keep every dollar on needs until you earn a bit more."
    ),
    Mode.GROWTH: (
        "Growth mode: you earned more than your baseline. "
        "Split the extra between needs, wants and savings."
    ),
}


def coaching_messages(result: ClassificationResult) -> List[str]:
    """Canned coaching text for a classification, headline first."""
    messages = [MODE_HEADLINES[result.mode]]

    if result.is_buffer_filling:
        messages.append(
            f"Your buffer is still filling: aim for ${result.buffer_goal:,.2f} "
            "before putting savings anywhere but your emergency fund."
        )
    else:
        messages.append("Your buffer goal is fully funded. Spread savings across all goals.")

    for group, diff in (("needs", result.comparison.needs_diff), ("wants", result.comparison.wants_diff)):
        if diff > OVERSPEND_TOLERANCE:
            messages.append(f"You are ${diff:,.2f} over the suggested {group} target.")

    shortfall = -result.comparison.savings_diff
    if shortfall > OVERSPEND_TOLERANCE:
        messages.append(f"You are ${shortfall:,.2f} short of the suggested savings target.")

    return messages
