"""
Validation for timeline documents and configuration payloads.

Timeline documents are untrusted input, so they are checked field by field in a
fixed order and rejected at the first defect. The message names the exact path
and the offending value, so the same bad document always produces the same
single-cause error.

Configuration and persistence payloads (repos.yaml, the imported projects blob)
are checked against JSON Schemas shipped in timeline/schemas/.
"""

import json
import math
from numbers import Real
from pathlib import Path
from typing import Any, NamedTuple

import jsonschema

from timeline.lib.constants import MONTH_KEY_PATTERN
from timeline.lib.dates import is_valid_date
from timeline.lib.errors import SchemaError, ValidationError
from timeline.lib.models import Priority, ProjectStatus, TaskStatus, TaskType

PROJECT_STATUSES = [s.value for s in ProjectStatus]
PRIORITIES = [p.value for p in Priority]
TASK_STATUSES = [s.value for s in TaskStatus]
TASK_TYPES = [t.value for t in TaskType]


class ValidationResult(NamedTuple):
    """Outcome of validating a document. error is set iff ok is False."""
    ok: bool
    error: str | None = None
    path: str | None = None


def validate(document: Any) -> ValidationResult:
    """Validate a parsed document. Never raises."""
    try:
        check_document(document)
    except ValidationError as e:
        return ValidationResult(ok=False, error=str(e), path=e.path)
    return ValidationResult(ok=True)


def _is_number(value) -> bool:
    # .inf and .nan parse from YAML and JSON but break every metric
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _is_non_empty_string(value) -> bool:
    return isinstance(value, str) and value != ""


def _fail(path: str, message: str, value=None):
    raise ValidationError(path, message, value)


def check_document(document: Any) -> None:
    """
    Check a parsed timeline document.

    Raises:
        ValidationError: at the first failing check
    """
    if not isinstance(document, dict) or document.get("project") is None:
        _fail("project", 'Missing required "project" section', document)

    project = document["project"]
    if not isinstance(project, dict):
        _fail("project", f'"project" must be a mapping, got {project!r}', project)

    _check_project(project)
    tasks = _check_tasks(document.get("tasks"))
    _check_dependency_references(tasks)
    _check_monthly_allocation(document.get("monthlyAllocation"))


def _check_project(project: dict) -> None:
    for key in ("id", "name", "description"):
        value = project.get(key)
        if not _is_non_empty_string(value):
            _fail(f"project.{key}", f"Missing or invalid project.{key}: {value!r}", value)

    status = project.get("status")
    if status not in PROJECT_STATUSES:
        _fail(
            "project.status",
            f'Invalid project.status: "{status}". Must be one of: {", ".join(PROJECT_STATUSES)}',
            status,
        )

    start = project.get("startDate")
    if not is_valid_date(start):
        _fail("project.startDate", f'Invalid project.startDate: "{start}". Must be YYYY-MM-DD format', start)

    end = project.get("endDate")
    if end is not None and not is_valid_date(end):
        _fail("project.endDate", f'Invalid project.endDate: "{end}". Must be YYYY-MM-DD format or null', end)

    estimated = project.get("estimatedHours")
    if not _is_number(estimated) or estimated < 0:
        _fail(
            "project.estimatedHours",
            f"project.estimatedHours must be a non-negative number, got {estimated!r}",
            estimated,
        )

    priority = project.get("priority")
    if priority not in PRIORITIES:
        _fail(
            "project.priority",
            f'Invalid project.priority: "{priority}". Must be one of: {", ".join(PRIORITIES)}',
            priority,
        )

    stakeholders = project.get("stakeholders")
    if not isinstance(stakeholders, list) or not stakeholders:
        _fail("project.stakeholders", f"project.stakeholders must be a non-empty array, got {stakeholders!r}", stakeholders)
    for i, stakeholder in enumerate(stakeholders):
        path = f"project.stakeholders[{i}]"
        if not isinstance(stakeholder, dict):
            _fail(path, f"{path} must be a mapping with name and role, got {stakeholder!r}", stakeholder)
        if not _is_non_empty_string(stakeholder.get("name")):
            _fail(f"{path}.name", f"{path}: Missing or invalid name: {stakeholder.get('name')!r}", stakeholder.get("name"))
        if not isinstance(stakeholder.get("role"), str):
            _fail(f"{path}.role", f"{path}: Missing or invalid role: {stakeholder.get('role')!r}", stakeholder.get("role"))

    repository = project.get("repository")
    if not isinstance(repository, dict) or not repository.get("url"):
        _fail("project.repository.url", f"Missing required project.repository.url (repository: {repository!r})", repository)

    actual = project.get("actualHours")
    if actual is not None and (not _is_number(actual) or actual < 0):
        _fail("project.actualHours", f"project.actualHours must be a non-negative number, got {actual!r}", actual)


def _check_tasks(tasks: Any) -> list[dict]:
    if not isinstance(tasks, list):
        _fail("tasks", f'Missing or invalid "tasks" array, got {tasks!r}', tasks)

    seen: set[str] = set()
    for i, task in enumerate(tasks):
        prefix = f"tasks[{i}]"
        if not isinstance(task, dict):
            _fail(prefix, f"{prefix}: must be a mapping, got {task!r}", task)

        task_id = task.get("id")
        if not _is_non_empty_string(task_id):
            _fail(f"{prefix}.id", f"{prefix}: Missing or invalid id: {task_id!r}", task_id)
        if task_id in seen:
            _fail(f"{prefix}.id", f'{prefix}: Duplicate task id "{task_id}"', task_id)
        seen.add(task_id)

        name = task.get("name")
        if not _is_non_empty_string(name):
            _fail(f"{prefix}.name", f"{prefix}: Missing or invalid name: {name!r}", name)

        for key in ("startDate", "endDate"):
            value = task.get(key)
            if not is_valid_date(value):
                _fail(f"{prefix}.{key}", f'{prefix}: Invalid {key} "{value}"', value)

        estimated = task.get("estimatedHours")
        if not _is_number(estimated) or estimated < 0:
            _fail(
                f"{prefix}.estimatedHours",
                f"{prefix}: estimatedHours must be a non-negative number, got {estimated!r}",
                estimated,
            )

        status = task.get("status")
        if status not in TASK_STATUSES:
            _fail(
                f"{prefix}.status",
                f'{prefix}: Invalid status "{status}". Must be one of: {", ".join(TASK_STATUSES)}',
                status,
            )

        progress = task.get("progress")
        if not _is_number(progress) or progress < 0 or progress > 100:
            _fail(f"{prefix}.progress", f"{prefix}: progress must be a number between 0 and 100, got {progress!r}", progress)

        dependencies = task.get("dependencies")
        if not isinstance(dependencies, list):
            _fail(f"{prefix}.dependencies", f"{prefix}: dependencies must be an array, got {dependencies!r}", dependencies)
        for j, dep in enumerate(dependencies):
            if not _is_non_empty_string(dep):
                _fail(f"{prefix}.dependencies[{j}]", f"{prefix}: dependency {j} must be a task id string, got {dep!r}", dep)

        actual = task.get("actualHours")
        if actual is not None and (not _is_number(actual) or actual < 0):
            _fail(f"{prefix}.actualHours", f"{prefix}: actualHours must be a non-negative number, got {actual!r}", actual)

        task_type = task.get("type")
        if task_type is not None and task_type not in TASK_TYPES:
            _fail(f"{prefix}.type", f'{prefix}: Invalid type "{task_type}". Must be one of: {", ".join(TASK_TYPES)}', task_type)

    return tasks


def _check_dependency_references(tasks: list[dict]) -> None:
    # Runs after every task passed on its own, so all ids are known.
    # Self-references and cycles are allowed.
    task_ids = {t["id"] for t in tasks}
    for i, task in enumerate(tasks):
        for dep_id in task["dependencies"]:
            if dep_id not in task_ids:
                _fail(
                    f"tasks[{i}].dependencies",
                    f'Task "{task["id"]}" has invalid dependency "{dep_id}" - task not found',
                    dep_id,
                )


def _check_monthly_allocation(allocation: Any) -> None:
    if allocation is None:
        return
    if not isinstance(allocation, dict):
        _fail("monthlyAllocation", f"monthlyAllocation must be a mapping of YYYY-MM to hours, got {allocation!r}", allocation)
    for month, hours in allocation.items():
        if not isinstance(month, str) or not MONTH_KEY_PATTERN.match(month):
            _fail("monthlyAllocation", f'Invalid monthlyAllocation month "{month}". Must be YYYY-MM format', month)
        if not _is_number(hours) or hours < 0:
            _fail(f"monthlyAllocation.{month}", f"monthlyAllocation.{month} must be a non-negative number, got {hours!r}", hours)


# ---------------------------------------------------------------------------
# JSON Schema validation for configuration and persistence payloads
# ---------------------------------------------------------------------------

# Cache loaded schemas
_schema_cache: dict[str, dict] = {}


def _get_schemas_dir() -> Path:
    """Get path to schemas directory."""
    return Path(__file__).parent.parent / "schemas"


def _load_schema(schema_name: str) -> dict:
    """Load schema by name, with caching."""
    if schema_name not in _schema_cache:
        schema_path = _get_schemas_dir() / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise SchemaError(schema_name, f"Schema file not found: {schema_path}")
        _schema_cache[schema_name] = json.loads(schema_path.read_text())
    return _schema_cache[schema_name]


def validate_schema(data: Any, schema_name: str) -> None:
    """
    Validate data against a named JSON Schema.

    Args:
        data: Parsed payload
        schema_name: Schema name (e.g., "repos", "imported_projects")

    Raises:
        SchemaError: If validation fails
    """
    schema = _load_schema(schema_name)

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        path = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else "(root)"
        raise SchemaError(schema_name, e.message, path) from None
