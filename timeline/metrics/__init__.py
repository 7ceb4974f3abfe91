"""Metrics engine: pure, read-only analytics over canonical projects.

Every function that depends on the current date takes an optional `today`
argument; none of them raise on a well-formed project.
"""

from timeline.metrics.progress import (
    round_half_up,
    expected_progress,
    actual_progress,
)
from timeline.metrics.health import (
    HealthStatus,
    HealthResult,
    project_health,
    health_label,
)
from timeline.metrics.forecast import (
    Confidence,
    Outlook,
    CompletionForecast,
    completion_forecast,
    forecast_outlook,
)
from timeline.metrics.hours import (
    MonthlyHours,
    ProjectContribution,
    HoursSummary,
    monthly_hours,
    hours_summary,
)
from timeline.metrics.position import (
    TimelinePosition,
    MilestonePosition,
    timeline_position,
    milestone_positions,
)
from timeline.metrics.milestones import (
    BlockedStatus,
    UpcomingMilestone,
    milestone_blocked_status,
    upcoming_milestones,
    format_days_until,
)
from timeline.metrics.tasks import TaskBreakdown, task_breakdown
from timeline.metrics.gantt import GanttLevel, GanttRow, gantt_rows

__all__ = [
    # progress
    "round_half_up",
    "expected_progress",
    "actual_progress",
    # health
    "HealthStatus",
    "HealthResult",
    "project_health",
    "health_label",
    # forecast
    "Confidence",
    "Outlook",
    "CompletionForecast",
    "completion_forecast",
    "forecast_outlook",
    # hours
    "MonthlyHours",
    "ProjectContribution",
    "HoursSummary",
    "monthly_hours",
    "hours_summary",
    # position
    "TimelinePosition",
    "MilestonePosition",
    "timeline_position",
    "milestone_positions",
    # milestones
    "BlockedStatus",
    "UpcomingMilestone",
    "milestone_blocked_status",
    "upcoming_milestones",
    "format_days_until",
    # tasks
    "TaskBreakdown",
    "task_breakdown",
    # gantt
    "GanttLevel",
    "GanttRow",
    "gantt_rows",
]
