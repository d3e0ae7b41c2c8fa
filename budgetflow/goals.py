"""Savings-goal progress helpers."""

from __future__ import annotations

import math
from dataclasses import replace
from datetime import date
from typing import Literal

from .models import Goal

GoalStatus = Literal["completed", "overdue", "on_track"]


def progress_percentage(goal: Goal) -> float:
    """Percent of the target saved, capped at 100 (0 for a non-positive target)."""

    if goal.target_amount <= 0:
        return 0.0
    return min(goal.current_amount / goal.target_amount * 100, 100.0)


def days_remaining(goal: Goal, today: date | None = None) -> int:
    today = today or date.today()
    return (date.fromisoformat(goal.target_date) - today).days


def goal_status(goal: Goal, today: date | None = None) -> GoalStatus:
    if progress_percentage(goal) >= 100:
        return "completed"
    if days_remaining(goal, today) < 0:
        return "overdue"
    return "on_track"


def contribute(goal: Goal, amount: float) -> Goal:
    """Return a copy of ``goal`` with ``amount`` added to the saved total."""

    if math.isnan(amount) or amount <= 0:
        raise ValueError("contribution must be a positive number")
    return replace(goal, current_amount=goal.current_amount + amount)


__all__ = [
    "GoalStatus",
    "contribute",
    "days_remaining",
    "goal_status",
    "progress_percentage",
]
