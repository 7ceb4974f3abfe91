"""Sample documents written by the fetch tool when no repository yields one."""

import copy


def _task(task_id, name, start, end, hours, status, progress, dependencies=(), actual=None):
    task = {
        "id": task_id,
        "name": name,
        "startDate": start,
        "endDate": end,
        "estimatedHours": hours,
        "status": status,
        "progress": progress,
        "dependencies": list(dependencies),
    }
    if actual is not None:
        task["actualHours"] = actual
    return task


_SAMPLES = [
    {
        "project": {
            "id": "project-management-app",
            "name": "Project Management App",
            "description": "Internal project management tool for the team",
            "status": "in_progress",
            "startDate": "2024-12-01",
            "endDate": "2025-03-15",
            "estimatedHours": 240,
            "actualHours": 85,
            "priority": "high",
            "priorityReason": "Needed for Q1 2025 team expansion",
            "stakeholders": [
                {"name": "Alex Morgan", "role": "Product Owner"},
                {"name": "Platform Team", "role": "End Users"},
            ],
            "repository": {"url": "https://github.com/example-org/project-management-app", "branch": "main"},
            "color": "#3498db",
        },
        "tasks": [
            _task("planning", "Requirements & Planning", "2024-12-01", "2024-12-15", 20, "completed", 100, actual=18),
            _task("design", "UI/UX Design", "2024-12-10", "2024-12-31", 40, "completed", 100, ["planning"], actual=35),
            _task("backend-api", "Backend API Development", "2025-01-01", "2025-02-15", 80, "in_progress", 45,
                  ["design"]),
            _task("frontend", "Frontend Development", "2025-01-15", "2025-03-01", 80, "in_progress", 20,
                  ["design", "backend-api"]),
        ],
        "monthlyAllocation": {"2024-12": 40, "2025-01": 60, "2025-02": 80, "2025-03": 60},
    },
    {
        "project": {
            "id": "design-docs",
            "name": "Design Docs",
            "description": "Design documentation for the customer platform",
            "status": "planning",
            "startDate": "2025-01-15",
            "endDate": "2025-02-28",
            "estimatedHours": 80,
            "actualHours": 0,
            "priority": "medium",
            "priorityReason": "Foundation for Q2 development",
            "stakeholders": [{"name": "Alex Morgan", "role": "Lead Designer"}],
            "repository": {"url": "https://github.com/example-org/design-docs", "branch": "main"},
            "color": "#9b59b6",
        },
        "tasks": [
            _task("research", "User Research", "2025-01-15", "2025-01-31", 30, "pending", 0),
            _task("wireframes", "Wireframe Design", "2025-02-01", "2025-02-15", 30, "pending", 0, ["research"]),
            _task("documentation", "Final Documentation", "2025-02-15", "2025-02-28", 20, "pending", 0,
                  ["wireframes"]),
        ],
        "monthlyAllocation": {"2025-01": 30, "2025-02": 50},
    },
    {
        "project": {
            "id": "browser-extension",
            "name": "Browser Extension",
            "description": "Browser extension for sales team productivity",
            "status": "in_progress",
            "startDate": "2024-11-15",
            "endDate": "2025-01-31",
            "estimatedHours": 120,
            "actualHours": 70,
            "priority": "high",
            "priorityReason": "Immediate productivity boost needed",
            "stakeholders": [
                {"name": "Alex Morgan", "role": "Developer"},
                {"name": "Sales Team", "role": "End Users"},
            ],
            "repository": {"url": "https://github.com/example-org/browser-extension", "branch": "main"},
            "color": "#e74c3c",
        },
        "tasks": [
            _task("manifest", "Extension Setup", "2024-11-15", "2024-11-30", 20, "completed", 100, actual=18),
            _task("core-features", "Core Features", "2024-12-01", "2025-01-15", 60, "in_progress", 80,
                  ["manifest"], actual=52),
            _task("polish", "Polish & Testing", "2025-01-15", "2025-01-31", 40, "pending", 0, ["core-features"]),
        ],
        "monthlyAllocation": {"2024-11": 20, "2024-12": 40, "2025-01": 60},
    },
]


def sample_documents() -> list[dict]:
    """Fresh copies of the sample documents."""
    return copy.deepcopy(_SAMPLES)


SAMPLE_DOCUMENTS = sample_documents()
