"""
Gantt rows for project-level and task-level timelines.

Task ids are only unique within a project, so task-level rows prefix every id
(and every dependency) with "<projectId>__".
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional

from timeline.lib.models import ProjectData, Task, TaskType
from timeline.metrics.progress import round_half_up

ID_SEPARATOR = "__"


class GanttLevel(str, Enum):
    PROJECT = "project"
    TASK = "task"


@dataclass
class GanttRow:
    id: str
    name: str
    start: date
    end: date
    progress: int
    dependencies: list[str] = field(default_factory=list)
    css_class: str = ""
    project_id: str = ""
    status: Optional[str] = None
    type: TaskType = TaskType.TASK
    assignee: Optional[str] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None


def row_id(project_id: str, task_id: str) -> str:
    return f"{project_id}{ID_SEPARATOR}{task_id}"


def project_row(data: ProjectData, today: Optional[date] = None) -> GanttRow:
    """One bar for the whole project; progress is the plain mean of task progress."""
    project = data.project
    progress = 0
    if data.tasks:
        progress = round_half_up(sum(t.progress for t in data.tasks) / len(data.tasks))

    return GanttRow(
        id=project.id,
        name=project.name,
        start=project.start_date,
        end=project.end_date or today or date.today(),
        progress=progress,
        css_class=f"status-{project.status.value.replace('_', '-')}",
        project_id=project.id,
        status=project.status.value,
    )


def task_row(data: ProjectData, task: Task) -> GanttRow:
    start = task.start_date
    if task.is_milestone and task.start_date == task.end_date:
        # Same-day milestones get a one-day bar ending on the milestone date
        start = task.start_date - timedelta(days=1)

    if task.is_milestone:
        css_class = "milestone"
    else:
        css_class = f"task-{task.status.value.replace('_', '-')}"

    return GanttRow(
        id=row_id(data.id, task.id),
        name=task.name,
        start=start,
        end=task.end_date,
        progress=task.progress or 0,
        dependencies=[row_id(data.id, dep) for dep in task.dependencies],
        css_class=css_class,
        project_id=data.id,
        status=task.status.value,
        type=task.type,
        assignee=task.assignee,
        estimated_hours=task.estimated_hours,
        actual_hours=task.actual_hours,
    )


def gantt_rows(
    projects: Iterable[ProjectData],
    level: GanttLevel = GanttLevel.PROJECT,
    today: Optional[date] = None,
) -> list[GanttRow]:
    """Rows for the given level. A project without tasks shows as a single project row."""
    level = GanttLevel(level)
    rows = []
    for data in projects:
        if level is GanttLevel.PROJECT or not data.tasks:
            rows.append(project_row(data, today))
        else:
            rows.extend(task_row(data, task) for task in data.tasks)
    return rows
