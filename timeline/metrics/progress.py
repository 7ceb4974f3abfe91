"""
Expected vs actual progress.

Expected progress is where the calendar says a project should be; actual
progress is the hours-weighted progress of its (non-milestone) tasks.
"""

import math
from datetime import date
from typing import Iterable, Optional

from timeline.lib.models import Task


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to nearest with halves toward positive infinity (2.5 -> 3, -2.5 -> -2)."""
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def expected_progress(start: date, end: Optional[date], today: Optional[date] = None) -> int:
    """Percentage (0-100) of the start..end span elapsed at today.

    An open-ended project (end is None) has no expected progress and yields 0;
    callers that need to distinguish that case must check end themselves.
    """
    if end is None:
        return 0
    today = today or date.today()

    if today < start:
        return 0
    if today > end:
        return 100

    total = (end - start).days
    if total <= 0:
        # Single-day span and today is that day
        return 100
    return round_half_up((today - start).days / total * 100)


def work_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Tasks that carry work, i.e. everything except milestones."""
    return [t for t in tasks if not t.is_milestone]


def actual_progress(tasks: Iterable[Task]) -> int:
    """Hours-weighted mean task progress (0-100), milestones excluded.

    Falls back to the plain mean when no task has estimated hours.
    """
    work = work_tasks(tasks)
    if not work:
        return 0

    total_hours = sum(t.estimated_hours for t in work)
    if total_hours == 0:
        return round_half_up(sum(t.progress for t in work) / len(work))

    weighted = sum(t.progress * t.estimated_hours for t in work)
    return round_half_up(weighted / total_hours)
