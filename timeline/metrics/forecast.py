"""
Completion forecasting.

Projects the finish date from the burn rate so far (actual hours per elapsed
calendar day) and compares it with the deadline. Always returns a forecast:
cases that cannot be projected come back with confidence "unavailable" or
"low" and an explanatory message.
"""

import math
from dataclasses import dataclass, replace
from datetime import date, timedelta
from enum import Enum
from typing import Optional

from timeline.lib.models import ProjectData, ProjectStatus
from timeline.metrics.progress import actual_progress, round_half_up

# Below this many hours/day the projection is meaningless
MIN_VELOCITY = 0.1

# daysAheadBehind when the velocity is too low to project
VELOCITY_TOO_LOW = -999


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNAVAILABLE = "unavailable"


class Outlook(str, Enum):
    """Coarse reading of a forecast, for display."""
    UNAVAILABLE = "unavailable"
    AHEAD = "ahead"                      # 3+ days ahead
    ON_TRACK = "on_track"                # 0-2 days ahead
    SLIGHTLY_BEHIND = "slightly_behind"  # up to a week behind
    BEHIND = "behind"


@dataclass
class CompletionForecast:
    projected_date: Optional[date]
    days_ahead_behind: int               # positive = ahead of the deadline
    velocity_hours_per_day: float
    remaining_hours: float
    completion_percentage: int
    confidence: Confidence
    message: str


UNAVAILABLE = CompletionForecast(
    projected_date=None,
    days_ahead_behind=0,
    velocity_hours_per_day=0,
    remaining_hours=0,
    completion_percentage=0,
    confidence=Confidence.UNAVAILABLE,
    message="Forecast unavailable",
)


def _plural_days(n: int) -> str:
    return "1 day" if n == 1 else f"{n} days"


def schedule_message(days_ahead_behind: int) -> str:
    if days_ahead_behind == 0:
        return "On track to meet deadline"
    if days_ahead_behind > 0:
        return f"{_plural_days(days_ahead_behind)} ahead of schedule"
    return f"{_plural_days(-days_ahead_behind)} behind schedule"


def forecast_confidence(elapsed_days: int, completion_percentage: int) -> Confidence:
    if elapsed_days >= 14 and completion_percentage >= 20:
        return Confidence.HIGH
    if elapsed_days >= 7 and completion_percentage >= 10:
        return Confidence.MEDIUM
    return Confidence.LOW


def completion_forecast(data: ProjectData, today: Optional[date] = None) -> CompletionForecast:
    """Forecast when a project will finish relative to its deadline."""
    project = data.project
    today = today or date.today()

    if project.end_date is None:
        return replace(UNAVAILABLE, message="No deadline set")

    if today < project.start_date:
        return replace(UNAVAILABLE, message="Project not started")

    if project.status is ProjectStatus.COMPLETED:
        return CompletionForecast(
            projected_date=project.end_date,
            days_ahead_behind=0,
            velocity_hours_per_day=0,
            remaining_hours=0,
            completion_percentage=100,
            confidence=Confidence.HIGH,
            message="Project completed",
        )

    actual_hours = project.actual_hours or 0
    estimated_hours = project.estimated_hours
    completion = actual_progress(data.tasks)

    if actual_hours == 0 or completion == 0:
        return replace(
            UNAVAILABLE,
            completion_percentage=completion,
            remaining_hours=estimated_hours,
            message="Not enough data to forecast",
        )

    # Today counts as an elapsed day
    elapsed_days = (today - project.start_date).days + 1
    velocity = actual_hours / elapsed_days
    remaining_hours = max(0, estimated_hours - actual_hours)
    days_until_deadline = (project.end_date - today).days

    if velocity < MIN_VELOCITY:
        return CompletionForecast(
            projected_date=None,
            days_ahead_behind=VELOCITY_TOO_LOW,
            velocity_hours_per_day=velocity,
            remaining_hours=remaining_hours,
            completion_percentage=completion,
            confidence=Confidence.LOW,
            message="Velocity too low to forecast",
        )

    # remaining / velocity, without the intermediate float
    days_to_complete = math.ceil(remaining_hours * elapsed_days / actual_hours)
    days_ahead_behind = days_until_deadline - days_to_complete

    return CompletionForecast(
        projected_date=today + timedelta(days=days_to_complete),
        days_ahead_behind=days_ahead_behind,
        velocity_hours_per_day=round_half_up(velocity, 1),
        remaining_hours=remaining_hours,
        completion_percentage=completion,
        confidence=forecast_confidence(elapsed_days, completion),
        message=schedule_message(days_ahead_behind),
    )


def forecast_outlook(forecast: CompletionForecast) -> Outlook:
    if forecast.confidence is Confidence.UNAVAILABLE:
        return Outlook.UNAVAILABLE
    if forecast.days_ahead_behind >= 3:
        return Outlook.AHEAD
    if forecast.days_ahead_behind >= 0:
        return Outlook.ON_TRACK
    if forecast.days_ahead_behind >= -7:
        return Outlook.SLIGHTLY_BEHIND
    return Outlook.BEHIND
