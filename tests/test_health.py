"""Tests for timeline.metrics.health."""

from datetime import date

import pytest

from timeline.metrics.health import (
    HealthStatus,
    budget_variance,
    health_label,
    project_health,
    status_for_variance,
)

# Project spanning ten days; on TODAY it is expected to be 50% done
TODAY = date(2025, 1, 6)


@pytest.fixture
def project_at(make_project, make_task):
    """Project with one 100h task at the given progress and hours spent."""
    def _make(progress, actual_hours, status="in_progress"):
        return make_project(
            tasks=[make_task("work", status="in_progress", progress=progress, estimated=100)],
            startDate="2025-01-01",
            endDate="2025-01-11",
            estimatedHours=100,
            actualHours=actual_hours,
            status=status,
        )
    return _make


class TestStatusForVariance:
    """Threshold inclusivity."""

    @pytest.mark.parametrize("variance,status", [
        (5, HealthStatus.ON_TRACK),
        (0, HealthStatus.ON_TRACK),
        (-10, HealthStatus.ON_TRACK),
        (-11, HealthStatus.AT_RISK),
        (-25, HealthStatus.AT_RISK),
        (-26, HealthStatus.OFF_TRACK),
    ])
    def test_boundaries(self, variance, status):
        assert status_for_variance(variance) is status


class TestProjectHealth:
    """End-to-end health scoring."""

    @pytest.mark.parametrize("progress,status", [
        (40, HealthStatus.ON_TRACK),    # schedule -10
        (39, HealthStatus.AT_RISK),     # schedule -11
        (25, HealthStatus.AT_RISK),     # schedule -25
        (24, HealthStatus.OFF_TRACK),   # schedule -26
    ])
    def test_schedule_boundaries(self, project_at, progress, status):
        # Hours spent match progress exactly, so budget variance is 0
        result = project_health(project_at(progress, progress), TODAY)
        assert result.schedule_variance == progress - 50
        assert result.budget_variance == 0
        assert result.status is status

    def test_ahead_of_schedule(self, project_at):
        result = project_health(project_at(80, 80), TODAY)
        assert result.schedule_variance == 30
        assert result.status is HealthStatus.ON_TRACK

    def test_over_budget_drives_status(self, project_at):
        result = project_health(project_at(50, 80), TODAY)
        assert result.schedule_variance == 0
        assert result.budget_variance == -60
        assert result.status is HealthStatus.OFF_TRACK

    def test_under_budget_is_positive(self, project_at):
        result = project_health(project_at(50, 25), TODAY)
        assert result.budget_variance == 50

    def test_completed_always_on_track(self, project_at):
        result = project_health(project_at(10, 90, status="completed"), TODAY)
        assert result.status is HealthStatus.ON_TRACK
        assert result.schedule_variance == -40

    def test_details(self, project_at):
        result = project_health(project_at(40, 30), TODAY)
        assert result.details.expected_progress == 50
        assert result.details.actual_progress == 40
        assert result.details.expected_hours == 40
        assert result.details.actual_hours == 30

    def test_open_ended_project(self, make_project):
        result = project_health(make_project(endDate=None), TODAY)
        assert result.details.expected_progress == 0


class TestBudgetVariance:
    """Budget variance edge cases."""

    def test_no_progress_is_zero(self):
        assert budget_variance(0, 100, 50) == 0

    def test_no_estimate_is_zero(self):
        assert budget_variance(50, 0, 10) == 0


class TestHealthLabel:
    """Display labels."""

    def test_labels(self):
        assert health_label(HealthStatus.ON_TRACK) == "On Track"
        assert health_label(HealthStatus.AT_RISK) == "At Risk"
        assert health_label(HealthStatus.OFF_TRACK) == "Off Track"

    def test_unknown_raises(self):
        with pytest.raises(ValueError):
            health_label("sideways")
