"""
Canonical project model.

Produced by the normalizer from a validated document and consumed read-only
by the store and the metrics engine.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Union

Hours = Union[int, float]


class ProjectStatus(str, Enum):
    DRAFT = "draft"
    PLANNING = "planning"
    IN_PROGRESS = "in_progress"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class TaskType(str, Enum):
    TASK = "task"
    MILESTONE = "milestone"


@dataclass
class Stakeholder:
    name: str
    role: str


@dataclass
class Repository:
    url: str
    branch: Optional[str] = None


@dataclass
class Project:
    """Project metadata (the `project` section of a timeline document)."""
    id: str
    name: str
    description: str
    status: ProjectStatus
    start_date: date
    end_date: Optional[date]                   # None = open-ended
    estimated_hours: Hours
    priority: Priority
    stakeholders: list[Stakeholder]
    repository: Repository
    actual_hours: Hours = 0
    priority_reason: Optional[str] = None
    color: Optional[str] = None


@dataclass
class Task:
    """A unit of work; ids are unique within the parent project only."""
    id: str
    name: str
    start_date: date
    end_date: date
    estimated_hours: Hours
    status: TaskStatus
    progress: Hours                            # 0-100
    dependencies: list[str] = field(default_factory=list)
    actual_hours: Hours = 0
    description: Optional[str] = None
    assignee: Optional[str] = None
    type: TaskType = TaskType.TASK

    @property
    def is_milestone(self) -> bool:
        return self.type is TaskType.MILESTONE


@dataclass
class ProjectData:
    """Canonical project: metadata, tasks and optional monthly allocation."""
    project: Project
    tasks: list[Task] = field(default_factory=list)
    monthly_allocation: Optional[dict[str, Hours]] = None
    metadata: Optional[dict] = None            # passed through opaquely

    @property
    def id(self) -> str:
        return self.project.id

    def find_task(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None
