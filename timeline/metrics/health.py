"""
Project health scoring.

Health compares actual progress against the calendar (schedule variance) and
hours spent against the hours that progress should have cost (budget
variance). The worse of the two decides the status.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from timeline.lib.models import ProjectData, ProjectStatus
from timeline.metrics.progress import actual_progress, expected_progress, round_half_up

# Lowest worst-variance (inclusive) for each status
ON_TRACK_THRESHOLD = -10
AT_RISK_THRESHOLD = -25


class HealthStatus(str, Enum):
    ON_TRACK = "on_track"
    AT_RISK = "at_risk"
    OFF_TRACK = "off_track"


@dataclass
class HealthDetails:
    expected_progress: int
    actual_progress: int
    expected_hours: int      # hours the actual progress should have cost, rounded
    actual_hours: float


@dataclass
class HealthResult:
    status: HealthStatus
    schedule_variance: int   # percentage points, positive = ahead
    budget_variance: int     # percent, positive = under budget
    details: HealthDetails


def status_for_variance(variance: float) -> HealthStatus:
    """Map a (worst) variance to a health status."""
    if variance >= ON_TRACK_THRESHOLD:
        return HealthStatus.ON_TRACK
    if variance >= AT_RISK_THRESHOLD:
        return HealthStatus.AT_RISK
    return HealthStatus.OFF_TRACK


def budget_variance(progress: int, estimated_hours: float, actual_hours: float) -> int:
    """Percent under (+) or over (-) the hours implied by progress. 0 when nothing is implied yet."""
    expected_hours = progress / 100 * estimated_hours
    if expected_hours <= 0:
        return 0
    return round_half_up((expected_hours - actual_hours) / expected_hours * 100)


def project_health(data: ProjectData, today: Optional[date] = None) -> HealthResult:
    """Score a project's health.

    Completed projects are always on track, whatever their variances.
    """
    project = data.project

    expected = expected_progress(project.start_date, project.end_date, today)
    actual = actual_progress(data.tasks)
    schedule = actual - expected

    actual_hours = project.actual_hours or 0
    budget = budget_variance(actual, project.estimated_hours, actual_hours)

    if project.status is ProjectStatus.COMPLETED:
        status = HealthStatus.ON_TRACK
    else:
        status = status_for_variance(min(schedule, budget))

    return HealthResult(
        status=status,
        schedule_variance=schedule,
        budget_variance=budget,
        details=HealthDetails(
            expected_progress=expected,
            actual_progress=actual,
            expected_hours=round_half_up(actual / 100 * project.estimated_hours),
            actual_hours=actual_hours,
        ),
    )


def health_label(status: HealthStatus) -> str:
    """Display label for a health status."""
    if status is HealthStatus.ON_TRACK:
        return "On Track"
    if status is HealthStatus.AT_RISK:
        return "At Risk"
    if status is HealthStatus.OFF_TRACK:
        return "Off Track"
    raise ValueError(f"Unknown health status: {status!r}")
