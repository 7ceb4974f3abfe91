"""Where "today" and each milestone sit along a project's start..end span."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from timeline.lib.models import ProjectData, TaskStatus
from timeline.metrics.progress import round_half_up


@dataclass
class TimelinePosition:
    percentage: int
    day_number: int          # 1-based day of the project, 0 before start
    total_days: int          # inclusive of both start and end day
    is_before_start: bool
    is_past_end: bool


@dataclass
class MilestonePosition:
    id: str
    name: str
    percentage: int
    date: date
    is_completed: bool


def timeline_position(start: date, end: Optional[date], today: Optional[date] = None) -> TimelinePosition:
    """Position of today within start..end. All zeros for an open-ended span."""
    if end is None:
        return TimelinePosition(percentage=0, day_number=0, total_days=0, is_before_start=False, is_past_end=False)
    today = today or date.today()

    span_days = (end - start).days
    total_days = span_days + 1

    if today < start:
        return TimelinePosition(percentage=0, day_number=0, total_days=total_days, is_before_start=True, is_past_end=False)

    if today > end:
        return TimelinePosition(percentage=100, day_number=total_days, total_days=total_days, is_before_start=False, is_past_end=True)

    elapsed_days = (today - start).days
    percentage = round_half_up(elapsed_days / span_days * 100) if span_days > 0 else 100
    return TimelinePosition(
        percentage=percentage,
        day_number=elapsed_days + 1,
        total_days=total_days,
        is_before_start=False,
        is_past_end=False,
    )


def milestone_positions(data: ProjectData) -> list[MilestonePosition]:
    """Milestones placed along the project span (0-100, clamped). Empty when open-ended."""
    project = data.project
    if project.end_date is None:
        return []

    span_days = (project.end_date - project.start_date).days
    positions = []
    for task in data.tasks:
        if not task.is_milestone:
            continue
        if span_days > 0:
            raw = round_half_up((task.end_date - project.start_date).days / span_days * 100)
            percentage = max(0, min(100, raw))
        else:
            percentage = 100 if task.end_date >= project.start_date else 0
        positions.append(MilestonePosition(
            id=task.id,
            name=task.name,
            percentage=percentage,
            date=task.end_date,
            is_completed=task.status is TaskStatus.COMPLETED,
        ))
    return positions
