"""Shared fixtures: minimal valid timeline documents and canonical projects."""

import copy

import pytest

from timeline.lib.normalize import normalize

BASE_DOCUMENT = {
    "project": {
        "id": "alpha",
        "name": "Alpha Project",
        "description": "Internal dashboard rebuild",
        "status": "in_progress",
        "startDate": "2025-01-01",
        "endDate": "2025-03-01",
        "estimatedHours": 100,
        "actualHours": 0,
        "priority": "high",
        "stakeholders": [{"name": "Dana", "role": "Product Owner"}],
        "repository": {"url": "https://github.com/example-org/alpha", "branch": "main"},
    },
    "tasks": [
        {
            "id": "design",
            "name": "Design",
            "startDate": "2025-01-01",
            "endDate": "2025-01-15",
            "estimatedHours": 40,
            "status": "completed",
            "progress": 100,
            "dependencies": [],
        },
        {
            "id": "build",
            "name": "Build",
            "startDate": "2025-01-16",
            "endDate": "2025-02-20",
            "estimatedHours": 60,
            "status": "in_progress",
            "progress": 50,
            "dependencies": ["design"],
        },
        {
            "id": "launch",
            "name": "Launch",
            "startDate": "2025-03-01",
            "endDate": "2025-03-01",
            "estimatedHours": 0,
            "status": "pending",
            "progress": 0,
            "dependencies": ["build"],
            "type": "milestone",
        },
    ],
}


def task_dict(task_id, status="pending", progress=0, estimated=10, start="2025-01-01", end="2025-01-10", **extra):
    task = {
        "id": task_id,
        "name": extra.pop("name", task_id.title()),
        "startDate": start,
        "endDate": end,
        "estimatedHours": estimated,
        "status": status,
        "progress": progress,
        "dependencies": extra.pop("dependencies", []),
    }
    task.update(extra)
    return task


@pytest.fixture
def document():
    """A fresh valid document that tests may mutate."""
    return copy.deepcopy(BASE_DOCUMENT)


@pytest.fixture
def make_document():
    """Factory: document with project overrides and an optional task list."""
    def _make(tasks=None, **project):
        doc = copy.deepcopy(BASE_DOCUMENT)
        doc["project"].update(project)
        if tasks is not None:
            doc["tasks"] = tasks
        return doc
    return _make


@pytest.fixture
def make_project(make_document):
    """Factory: canonical ProjectData built from document overrides."""
    def _make(tasks=None, monthly_allocation=None, **project):
        doc = make_document(tasks=tasks, **project)
        if monthly_allocation is not None:
            doc["monthlyAllocation"] = monthly_allocation
        return normalize(doc)
    return _make


@pytest.fixture
def make_task():
    return task_dict
