"""
Monthly hour aggregation and portfolio totals.

Estimated hours per month come from a project's monthlyAllocation when it has
one, otherwise from spreading estimatedHours evenly over the months the
project spans. Actual hours come from completed tasks, booked to the month of
the task's end date.

Known rounding drift: the even spread uses ceil(estimated / months) per month,
so the monthly figures of one project can sum to more than its estimatedHours.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from timeline.lib.dates import month_key, months_between
from timeline.lib.models import ProjectData, TaskStatus
from timeline.metrics.progress import round_half_up


@dataclass
class ProjectContribution:
    project_id: str
    project_name: str
    hours: float


@dataclass
class MonthlyHours:
    month: str                       # YYYY-MM
    estimated: float = 0
    actual: float = 0
    projects: list[ProjectContribution] = field(default_factory=list)


@dataclass
class HoursSummary:
    total_estimated: float
    total_actual: float
    remaining: float                 # estimated - actual, may be negative
    utilization: int                 # actual / estimated, percent
    project_count: int
    status_counts: dict[str, int]

    @property
    def over_budget(self) -> bool:
        return self.utilization > 100


def even_monthly_split(data: ProjectData, today: Optional[date] = None) -> dict[str, int]:
    """Per-month hours for a project without an explicit allocation.

    Open-ended projects are spread up to today's month.
    """
    project = data.project
    end = project.end_date or today or date.today()
    months = months_between(project.start_date, end)
    if not months:
        return {}
    per_month = math.ceil(project.estimated_hours / len(months))
    return {month: per_month for month in months}


def monthly_hours(projects: Iterable[ProjectData], today: Optional[date] = None) -> list[MonthlyHours]:
    """Aggregate estimated and actual hours per calendar month, oldest month first."""
    buckets: dict[str, MonthlyHours] = {}

    def bucket(month: str) -> MonthlyHours:
        if month not in buckets:
            buckets[month] = MonthlyHours(month=month)
        return buckets[month]

    for data in projects:
        project = data.project

        if data.monthly_allocation is not None:
            allocation = data.monthly_allocation
        else:
            allocation = even_monthly_split(data, today)

        for month, hours in allocation.items():
            summary = bucket(month)
            summary.estimated += hours
            summary.projects.append(ProjectContribution(
                project_id=project.id,
                project_name=project.name,
                hours=hours,
            ))

        for task in data.tasks:
            if task.status is TaskStatus.COMPLETED and task.actual_hours:
                bucket(month_key(task.end_date)).actual += task.actual_hours

    return [buckets[month] for month in sorted(buckets)]


def hours_summary(projects: Iterable[ProjectData]) -> HoursSummary:
    """Portfolio totals: hours, utilization and project counts by status."""
    projects = list(projects)
    total_estimated = sum(p.project.estimated_hours for p in projects)
    total_actual = sum(p.project.actual_hours or 0 for p in projects)

    status_counts: dict[str, int] = {}
    for p in projects:
        key = p.project.status.value
        status_counts[key] = status_counts.get(key, 0) + 1

    utilization = round_half_up(total_actual / total_estimated * 100) if total_estimated > 0 else 0

    return HoursSummary(
        total_estimated=total_estimated,
        total_actual=total_actual,
        remaining=total_estimated - total_actual,
        utilization=utilization,
        project_count=len(projects),
        status_counts=status_counts,
    )
