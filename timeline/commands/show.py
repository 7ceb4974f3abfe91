"""
timeline show - Project details: metadata, health, forecast and milestones.
"""

from timeline.lib.dates import days_remaining, format_date, is_overdue
from timeline.lib.errors import NotFoundError
from timeline.lib.models import TaskStatus
from timeline.metrics import (
    completion_forecast,
    format_days_until,
    health_label,
    project_health,
    task_breakdown,
    timeline_position,
    upcoming_milestones,
)
from timeline.store import open_store


def _hours(value) -> str:
    return f"{value:g}h"


def _days(n: int) -> str:
    return "1 day" if n == 1 else f"{n} days"


def cmd_show(args, settings) -> int:
    """Show one project."""
    store = open_store(settings.storage_path, settings.seed_path)
    try:
        data = store.get(args.id)
    except NotFoundError as e:
        print(f"ERROR: {e}")
        return 1

    project = data.project
    today = args.today

    print(f"Project: {project.name} ({project.id})")
    print(f"Status: {project.status.value}")
    priority = project.priority.value
    if project.priority_reason:
        priority += f" ({project.priority_reason})"
    print(f"Priority: {priority}")
    print(f"Description: {project.description}")
    dates = f"Dates: {format_date(project.start_date)} - "
    if project.end_date is None:
        dates += "open-ended"
    else:
        dates += format_date(project.end_date)
        remaining = days_remaining(project.end_date, today)
        if is_overdue(project.end_date, project.status, today):
            dates += f" (overdue by {_days(-remaining)})"
        elif remaining >= 0:
            dates += f" ({_days(remaining)} left)"
    print(dates)
    print(f"Hours: {_hours(project.actual_hours)} of {_hours(project.estimated_hours)} estimated")
    repository = project.repository.url
    if project.repository.branch:
        repository += f" @ {project.repository.branch}"
    print(f"Repository: {repository}")
    if store.is_shadowed(project.id):
        print("Source: imported (overrides fetched copy)")
    elif store.is_read_only(project.id):
        print("Source: fetched")
    else:
        print("Source: imported")

    if project.stakeholders:
        print()
        print("Stakeholders:")
        for s in project.stakeholders:
            print(f"  {s.name} - {s.role}")

    health = project_health(data, today)
    print()
    print(f"Health: {health_label(health.status)}")
    print(f"  Progress: {health.details.actual_progress}% actual vs {health.details.expected_progress}% expected "
          f"({health.schedule_variance:+d})")
    print(f"  Budget: {_hours(health.details.actual_hours)} spent vs {_hours(health.details.expected_hours)} "
          f"expected ({health.budget_variance:+d}%)")

    forecast = completion_forecast(data, today)
    print()
    print(f"Forecast: {forecast.message} [{forecast.confidence.value}]")
    if forecast.projected_date:
        print(f"  Projected completion: {format_date(forecast.projected_date)}")
        print(f"  Velocity: {forecast.velocity_hours_per_day:g}h/day, {_hours(forecast.remaining_hours)} remaining")

    if project.end_date:
        position = timeline_position(project.start_date, project.end_date, today)
        if position.is_before_start:
            where = "not started"
        elif position.is_past_end:
            where = "past end date"
        else:
            where = f"day {position.day_number} of {position.total_days}"
        print(f"Timeline: {position.percentage}% ({where})")

    breakdown = task_breakdown(data.tasks)
    print()
    print(f"Tasks: {breakdown.total}")
    for status in TaskStatus:
        counts = breakdown.by_status[status]
        if counts.count:
            print(f"  {status.value:<12} {counts.count:>3}  ({counts.percentage}%)")

    milestones = upcoming_milestones(data.tasks, today)
    if milestones:
        print()
        print("Upcoming milestones:")
        for m in milestones:
            line = f"  {m.milestone.name:<30} {format_date(m.milestone.end_date):<14} {format_days_until(m.days_until)}"
            if m.is_blocked:
                line += f"  [blocked by: {', '.join(m.blocked_by)}]"
            print(line)

    return 0
