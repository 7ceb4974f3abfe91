"""
timeline list - List projects with health and progress.
"""

from timeline.metrics import actual_progress, health_label, project_health
from timeline.store import ProjectFilter, open_store


def cmd_list(args, settings) -> int:
    """List projects matching --status/--priority/--search."""
    store = open_store(settings.storage_path, settings.seed_path)
    project_filter = ProjectFilter(status=args.status, priority=args.priority, search=args.search)
    projects = store.list(project_filter)

    if not projects:
        if len(store) == 0:
            print("Projects: none")
            print()
            print("Get started:")
            print("  timeline import path/to/timeline.yaml")
            print("  timeline fetch")
        else:
            print("No projects match the filter.")
        return 0

    print(f"  {'ID':<28} {'STATUS':<12} {'PRIORITY':<9} {'HEALTH':<10} PROGRESS")
    print("-" * 72)
    for data in projects:
        project = data.project
        health = project_health(data, args.today)
        progress = actual_progress(data.tasks)
        marker = "*" if store.is_read_only(data.id) and not store.is_shadowed(data.id) else " "
        project_id = data.id[:25] + "..." if len(data.id) > 28 else data.id
        print(f"{marker} {project_id:<28} {project.status.value:<12} {project.priority.value:<9} "
              f"{health_label(health.status):<10} {progress:>3}%")
    print()

    fetched = sum(1 for p in projects if store.is_read_only(p.id) and not store.is_shadowed(p.id))
    print(f"{len(projects)} project(s)" + (f", {fetched} fetched (*)" if fetched else ""))
    return 0
