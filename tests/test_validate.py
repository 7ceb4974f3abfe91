"""Tests for timeline.lib.validate."""

import json
from datetime import date

import pytest
import yaml

from timeline.lib.errors import SchemaError, ValidationError
from timeline.lib.validate import (
    PRIORITIES,
    PROJECT_STATUSES,
    TASK_STATUSES,
    check_document,
    validate,
    validate_schema,
)


class TestValidDocuments:
    """Documents that must pass."""

    def test_base_document_is_valid(self, document):
        result = validate(document)
        assert result.ok is True
        assert result.error is None

    def test_null_end_date_allowed(self, document):
        document["project"]["endDate"] = None
        assert validate(document).ok

    def test_missing_end_date_allowed(self, document):
        del document["project"]["endDate"]
        assert validate(document).ok

    def test_empty_tasks_allowed(self, document):
        document["tasks"] = []
        assert validate(document).ok

    def test_yaml_date_objects_accepted(self, document):
        document["project"]["startDate"] = date(2025, 1, 1)
        document["tasks"][0]["endDate"] = date(2025, 1, 15)
        assert validate(document).ok

    def test_self_dependency_allowed(self, document):
        document["tasks"][0]["dependencies"] = ["design"]
        assert validate(document).ok

    def test_dependency_cycle_allowed(self, document):
        document["tasks"][0]["dependencies"] = ["build"]
        assert validate(document).ok

    def test_end_before_start_not_rejected(self, document):
        document["project"]["endDate"] = "2024-01-01"
        assert validate(document).ok

    def test_validate_never_raises(self):
        for junk in (None, 42, "text", [], {"project": "x"}):
            assert validate(junk).ok is False


class TestProjectChecks:
    """Project section checks and their messages."""

    def test_missing_project(self):
        result = validate({"tasks": []})
        assert result.error == 'Missing required "project" section'
        assert result.path == "project"

    @pytest.mark.parametrize("key", ["id", "name", "description"])
    def test_required_strings(self, document, key):
        document["project"][key] = ""
        result = validate(document)
        assert result.error == f"Missing or invalid project.{key}: ''"
        assert result.path == f"project.{key}"

    def test_missing_id_message(self, document):
        del document["project"]["id"]
        assert validate(document).error == "Missing or invalid project.id: None"

    def test_invalid_status_lists_allowed_values(self, document):
        document["project"]["status"] = "done"
        error = validate(document).error
        assert error == f'Invalid project.status: "done". Must be one of: {", ".join(PROJECT_STATUSES)}'

    def test_invalid_start_date(self, document):
        document["project"]["startDate"] = "2025-02-30"
        assert validate(document).error == 'Invalid project.startDate: "2025-02-30". Must be YYYY-MM-DD format'

    def test_non_padded_date_rejected(self, document):
        document["project"]["startDate"] = "2025-1-1"
        assert validate(document).path == "project.startDate"

    def test_datetime_rejected(self, document):
        document["project"]["endDate"] = "2025-03-01T00:00:00"
        assert validate(document).path == "project.endDate"

    @pytest.mark.parametrize("value", [-1, "100", True, None])
    def test_estimated_hours(self, document, value):
        document["project"]["estimatedHours"] = value
        assert validate(document).path == "project.estimatedHours"

    def test_zero_estimated_hours_allowed(self, document):
        document["project"]["estimatedHours"] = 0
        assert validate(document).ok

    def test_invalid_priority(self, document):
        document["project"]["priority"] = "urgent"
        error = validate(document).error
        assert error == f'Invalid project.priority: "urgent". Must be one of: {", ".join(PRIORITIES)}'

    def test_empty_stakeholders(self, document):
        document["project"]["stakeholders"] = []
        assert validate(document).path == "project.stakeholders"

    def test_stakeholder_without_name(self, document):
        document["project"]["stakeholders"] = [{"role": "Owner"}]
        assert validate(document).path == "project.stakeholders[0].name"

    def test_missing_repository_url(self, document):
        document["project"]["repository"] = {"branch": "main"}
        assert validate(document).path == "project.repository.url"

    def test_negative_actual_hours(self, document):
        document["project"]["actualHours"] = -5
        assert validate(document).path == "project.actualHours"


class TestTaskChecks:
    """Per-task checks."""

    def test_tasks_must_be_list(self, document):
        document["tasks"] = {"design": {}}
        assert validate(document).path == "tasks"

    def test_missing_tasks(self, document):
        del document["tasks"]
        assert validate(document).path == "tasks"

    def test_duplicate_task_id(self, document):
        document["tasks"][1]["id"] = "design"
        document["tasks"][2]["dependencies"] = ["design"]
        result = validate(document)
        assert result.error == 'tasks[1]: Duplicate task id "design"'

    def test_invalid_task_status(self, document):
        document["tasks"][1]["status"] = "started"
        error = validate(document).error
        assert error == f'tasks[1]: Invalid status "started". Must be one of: {", ".join(TASK_STATUSES)}'

    @pytest.mark.parametrize("progress", [-1, 101, "50", None])
    def test_progress_range(self, document, progress):
        document["tasks"][0]["progress"] = progress
        assert validate(document).path == "tasks[0].progress"

    def test_progress_bounds_inclusive(self, document):
        document["tasks"][0]["progress"] = 0
        document["tasks"][1]["progress"] = 100
        assert validate(document).ok

    def test_invalid_task_date(self, document):
        document["tasks"][2]["endDate"] = "soon"
        assert validate(document).error == 'tasks[2]: Invalid endDate "soon"'

    def test_dependencies_must_be_list(self, document):
        document["tasks"][1]["dependencies"] = "design"
        assert validate(document).path == "tasks[1].dependencies"

    def test_invalid_type(self, document):
        document["tasks"][0]["type"] = "epic"
        assert validate(document).path == "tasks[0].type"

    def test_dangling_dependency(self, document):
        document["tasks"][1]["dependencies"] = ["design", "zz"]
        result = validate(document)
        assert result.error == 'Task "build" has invalid dependency "zz" - task not found'
        assert result.path == "tasks[1].dependencies"

    def test_forward_reference_allowed(self, document):
        document["tasks"][0]["dependencies"] = ["launch"]
        assert validate(document).ok


class TestCheckOrdering:
    """The first failing check in the fixed order is the one reported."""

    def test_project_checked_before_tasks(self, document):
        document["project"]["priority"] = "nope"
        document["tasks"] = "nope"
        assert validate(document).path == "project.priority"

    def test_id_checked_before_status(self, document):
        document["project"]["id"] = None
        document["project"]["status"] = "nope"
        assert validate(document).path == "project.id"

    def test_task_fields_before_dependency_references(self, document):
        document["tasks"][0]["dependencies"] = ["missing"]
        document["tasks"][2]["progress"] = 500
        assert validate(document).path == "tasks[2].progress"

    def test_dependency_references_before_allocation(self, document):
        document["tasks"][0]["dependencies"] = ["missing"]
        document["monthlyAllocation"] = {"January": 10}
        assert validate(document).path == "tasks[0].dependencies"

    def test_same_input_same_error(self, document):
        document["project"]["status"] = "x"
        document["tasks"][0]["id"] = ""
        assert validate(document) == validate(document)


class TestMonthlyAllocation:
    """Optional monthlyAllocation mapping."""

    def test_valid_allocation(self, document):
        document["monthlyAllocation"] = {"2025-01": 40, "2025-02": 60.5}
        assert validate(document).ok

    def test_bad_month_key(self, document):
        document["monthlyAllocation"] = {"2025-13": 10}
        assert validate(document).path == "monthlyAllocation"

    def test_negative_hours(self, document):
        document["monthlyAllocation"] = {"2025-01": -1}
        assert validate(document).path == "monthlyAllocation.2025-01"


class TestNonFiniteNumbers:
    """inf and nan parse from YAML and JSON but are not valid hours or progress."""

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_project_estimated_hours(self, document, value):
        document["project"]["estimatedHours"] = value
        assert validate(document).path == "project.estimatedHours"

    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_project_actual_hours(self, document, value):
        document["project"]["actualHours"] = value
        assert validate(document).path == "project.actualHours"

    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_task_progress(self, document, value):
        document["tasks"][1]["progress"] = value
        assert validate(document).path == "tasks[1].progress"

    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_task_hours(self, document, value):
        document["tasks"][0]["actualHours"] = value
        assert validate(document).path == "tasks[0].actualHours"

    def test_allocation_hours(self, document):
        document["monthlyAllocation"] = {"2025-01": float("nan")}
        assert validate(document).path == "monthlyAllocation.2025-01"

    def test_yaml_special_floats(self, document):
        text = yaml.safe_dump(document).replace("estimatedHours: 100", "estimatedHours: .inf", 1)
        loaded = yaml.safe_load(text)
        assert loaded["project"]["estimatedHours"] == float("inf")
        assert validate(loaded).path == "project.estimatedHours"

    def test_json_special_floats(self, document):
        text = json.dumps(document).replace('"progress": 50', '"progress": NaN', 1)
        assert validate(json.loads(text)).path == "tasks[1].progress"

    def test_large_finite_values_allowed(self, document):
        document["project"]["estimatedHours"] = 1e12
        assert validate(document).ok


class TestCheckDocument:
    """check_document raises the typed error."""

    def test_raises_validation_error(self, document):
        document["project"]["estimatedHours"] = -1
        with pytest.raises(ValidationError) as exc_info:
            check_document(document)
        assert exc_info.value.path == "project.estimatedHours"
        assert exc_info.value.value == -1


class TestValidateSchema:
    """JSON Schema validation for configuration payloads."""

    def test_valid_repos(self):
        validate_schema({"repositories": [{"owner": "o", "repo": "r", "private": True}]}, "repos")

    def test_repos_unknown_key(self):
        with pytest.raises(SchemaError) as exc_info:
            validate_schema({"repositories": [{"owner": "o", "repo": "r", "token": "x"}]}, "repos")
        assert exc_info.value.schema_name == "repos"
        assert exc_info.value.path == "repositories.0"

    def test_imported_projects_must_be_list(self):
        with pytest.raises(SchemaError):
            validate_schema({"project": {}}, "imported_projects")

    def test_unknown_schema(self):
        with pytest.raises(SchemaError, match="Schema file not found"):
            validate_schema({}, "does_not_exist")
