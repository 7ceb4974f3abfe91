"""
Document normalization.

Turns a validated timeline document into the canonical ProjectData model and
back. Also hosts the combined text -> ProjectData entry point used by the
store, the CLI and the fetch tool.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from timeline.lib.dates import format_iso_date, parse_iso_date
from timeline.lib.models import (
    Priority,
    Project,
    ProjectData,
    ProjectStatus,
    Repository,
    Stakeholder,
    Task,
    TaskStatus,
    TaskType,
)
from timeline.lib.validate import validate

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Outcome of parsing document text. data is set iff success is True."""
    success: bool
    data: Optional[ProjectData] = None
    error: Optional[str] = None


def normalize(document: dict) -> ProjectData:
    """Build the canonical model from a document that already passed validation.

    No re-validation happens here: an exception means the validator let a
    malformed document through.
    """
    raw = document["project"]
    repository = raw["repository"]

    project = Project(
        id=raw["id"],
        name=raw["name"],
        description=raw["description"],
        status=ProjectStatus(raw["status"]),
        start_date=parse_iso_date(raw["startDate"]),
        end_date=parse_iso_date(raw["endDate"]) if raw.get("endDate") is not None else None,
        estimated_hours=raw["estimatedHours"],
        actual_hours=raw.get("actualHours") or 0,
        priority=Priority(raw["priority"]),
        priority_reason=raw.get("priorityReason"),
        stakeholders=[Stakeholder(name=s["name"], role=s["role"]) for s in raw["stakeholders"]],
        repository=Repository(url=repository["url"], branch=repository.get("branch")),
        color=raw.get("color"),
    )

    tasks = [
        Task(
            id=t["id"],
            name=t["name"],
            description=t.get("description"),
            start_date=parse_iso_date(t["startDate"]),
            end_date=parse_iso_date(t["endDate"]),
            estimated_hours=t["estimatedHours"],
            actual_hours=t.get("actualHours") or 0,
            status=TaskStatus(t["status"]),
            progress=t["progress"],
            dependencies=list(t["dependencies"]),
            assignee=t.get("assignee"),
            type=TaskType(t.get("type") or TaskType.TASK.value),
        )
        for t in document["tasks"]
    ]

    allocation = document.get("monthlyAllocation")
    metadata = document.get("metadata")

    return ProjectData(
        project=project,
        tasks=tasks,
        monthly_allocation=dict(allocation) if allocation is not None else None,
        metadata=dict(metadata) if isinstance(metadata, dict) else metadata,
    )


def _put(target: dict, key: str, value) -> None:
    if value is not None:
        target[key] = value


def to_document(data: ProjectData) -> dict:
    """Serialize canonical data back to the document shape.

    Optional fields are emitted only when set; defaults applied by normalize()
    (actualHours, type) are always emitted.
    """
    p = data.project

    repository = {"url": p.repository.url}
    _put(repository, "branch", p.repository.branch)

    project = {
        "id": p.id,
        "name": p.name,
        "description": p.description,
        "status": p.status.value,
        "startDate": format_iso_date(p.start_date),
        "endDate": format_iso_date(p.end_date) if p.end_date is not None else None,
        "estimatedHours": p.estimated_hours,
        "actualHours": p.actual_hours,
        "priority": p.priority.value,
        "stakeholders": [{"name": s.name, "role": s.role} for s in p.stakeholders],
        "repository": repository,
    }
    _put(project, "priorityReason", p.priority_reason)
    _put(project, "color", p.color)

    tasks = []
    for t in data.tasks:
        task = {
            "id": t.id,
            "name": t.name,
            "startDate": format_iso_date(t.start_date),
            "endDate": format_iso_date(t.end_date),
            "estimatedHours": t.estimated_hours,
            "actualHours": t.actual_hours,
            "status": t.status.value,
            "progress": t.progress,
            "dependencies": list(t.dependencies),
            "type": t.type.value,
        }
        _put(task, "description", t.description)
        _put(task, "assignee", t.assignee)
        tasks.append(task)

    document = {"project": project, "tasks": tasks}
    _put(document, "monthlyAllocation", dict(data.monthly_allocation) if data.monthly_allocation is not None else None)
    _put(document, "metadata", data.metadata)
    return document


def parse_document_data(document) -> ParseResult:
    """Validate and normalize an already-parsed document."""
    result = validate(document)
    if not result.ok:
        return ParseResult(success=False, error=f"Validation error: {result.error}")
    return ParseResult(success=True, data=normalize(document))


def parse_document(text: str) -> ParseResult:
    """Parse timeline document text (YAML or JSON), validate and normalize it.

    Never raises for bad input; the failure reason is in ParseResult.error.
    """
    # Unquoted impossible dates (2025-02-30) raise ValueError from the YAML loader
    try:
        document = yaml.safe_load(text)
    except (yaml.YAMLError, ValueError) as e:
        return ParseResult(success=False, error=f"YAML parse error: {e}")

    if document is None or not isinstance(document, dict):
        return ParseResult(success=False, error="Invalid YAML: Could not parse content")

    return parse_document_data(document)


def load_document_file(path: Path) -> ParseResult:
    """Read a timeline document from disk and parse it."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return ParseResult(success=False, error=f"Could not read file {path}: {e}")
    if not text.strip():
        return ParseResult(success=False, error=f"Could not read file content: {path} is empty")
    return parse_document(text)
