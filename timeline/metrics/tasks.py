"""Task status breakdown for a project (milestones excluded)."""

from dataclasses import dataclass
from typing import Iterable

from timeline.lib.models import Task, TaskStatus
from timeline.metrics.progress import round_half_up, work_tasks


@dataclass
class StatusCount:
    count: int
    percentage: int


@dataclass
class TaskBreakdown:
    total: int
    by_status: dict[TaskStatus, StatusCount]

    def count(self, status: TaskStatus) -> int:
        return self.by_status[status].count


def task_breakdown(tasks: Iterable[Task]) -> TaskBreakdown:
    work = work_tasks(tasks)
    total = len(work)
    by_status = {}
    for status in TaskStatus:
        count = sum(1 for t in work if t.status is status)
        by_status[status] = StatusCount(
            count=count,
            percentage=round_half_up(count / total * 100) if total else 0,
        )
    return TaskBreakdown(total=total, by_status=by_status)
