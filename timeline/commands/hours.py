"""
timeline hours - Monthly estimated and actual hours across projects.
"""

from timeline.lib.dates import format_month
from timeline.metrics import hours_summary, monthly_hours
from timeline.store import ProjectFilter, open_store


def cmd_hours(args, settings) -> int:
    store = open_store(settings.storage_path, settings.seed_path)
    project_filter = ProjectFilter(status=args.status, priority=args.priority, search=args.search)
    projects = store.list(project_filter)

    if not projects:
        print("No projects.")
        return 0

    months = monthly_hours(projects, args.today)
    print(f"  {'MONTH':<15} {'ESTIMATED':>10} {'ACTUAL':>8}  PROJECTS")
    print("-" * 60)
    for month in months:
        names = ", ".join(c.project_id for c in month.projects)
        print(f"  {format_month(month.month):<15} {month.estimated:>10g} {month.actual:>8g}  {names}")
    print()

    summary = hours_summary(projects)
    print(f"Estimated: {summary.total_estimated:g}h")
    print(f"Actual:    {summary.total_actual:g}h")
    print(f"Remaining: {summary.remaining:g}h")
    utilization = f"{summary.utilization}%"
    if summary.over_budget:
        utilization += " (over budget)"
    print(f"Utilization: {utilization}")
    counts = ", ".join(f"{n} {status}" for status, n in sorted(summary.status_counts.items()))
    print(f"{summary.project_count} project(s): {counts}")
    return 0
