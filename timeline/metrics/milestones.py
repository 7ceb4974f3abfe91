"""Milestone blocking and upcoming-milestone lookups."""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from timeline.lib.models import Task, TaskStatus
from timeline.metrics.progress import round_half_up


@dataclass
class BlockedStatus:
    is_blocked: bool
    blocked_by: list[str] = field(default_factory=list)   # task names, in dependency order


@dataclass
class UpcomingMilestone:
    milestone: Task
    days_until: int          # negative when overdue
    is_blocked: bool
    blocked_by: list[str]


def milestone_blocked_status(milestone: Task, tasks: Iterable[Task]) -> BlockedStatus:
    """A milestone is blocked while any task it depends on is not completed."""
    by_id = {t.id: t for t in tasks}
    blocked_by = []
    for dep_id in milestone.dependencies:
        dep = by_id.get(dep_id)
        if dep is not None and dep.status is not TaskStatus.COMPLETED:
            blocked_by.append(dep.name)
    return BlockedStatus(is_blocked=bool(blocked_by), blocked_by=blocked_by)


def upcoming_milestones(tasks: list[Task], today: Optional[date] = None, limit: int = 3) -> list[UpcomingMilestone]:
    """Incomplete milestones, soonest (or most overdue) first."""
    today = today or date.today()
    upcoming = []
    for task in tasks:
        if not task.is_milestone or task.status is TaskStatus.COMPLETED:
            continue
        blocked = milestone_blocked_status(task, tasks)
        upcoming.append(UpcomingMilestone(
            milestone=task,
            days_until=(task.end_date - today).days,
            is_blocked=blocked.is_blocked,
            blocked_by=blocked.blocked_by,
        ))
    upcoming.sort(key=lambda m: m.days_until)
    return upcoming[:limit]


def format_days_until(days: int) -> str:
    """Human-readable distance to a due date."""
    if days < 0:
        overdue = -days
        return "1 day overdue" if overdue == 1 else f"{overdue} days overdue"
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    if days <= 7:
        return f"{days} days"
    if days <= 14:
        return "~1 week"
    if days <= 21:
        return "~2 weeks"
    if days <= 28:
        return "~3 weeks"
    if days <= 45:
        return "~1 month"
    return f"{round_half_up(days / 30)} months"
