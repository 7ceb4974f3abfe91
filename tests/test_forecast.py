"""Tests for timeline.metrics.forecast."""

from datetime import date

import pytest

from timeline.metrics.forecast import (
    VELOCITY_TOO_LOW,
    CompletionForecast,
    Confidence,
    Outlook,
    completion_forecast,
    forecast_confidence,
    forecast_outlook,
    schedule_message,
)


@pytest.fixture
def forecast_project(make_project, make_task):
    """100h project running Jan 1 - Feb 28 2025, 52% complete by task hours."""
    def _make(**project):
        fields = dict(
            startDate="2025-01-01",
            endDate="2025-02-28",
            estimatedHours=100,
            actualHours=50,
        )
        fields.update(project)
        return make_project(
            tasks=[
                make_task("a", status="completed", progress=100, estimated=40),
                make_task("b", status="in_progress", progress=20, estimated=60),
            ],
            **fields,
        )
    return _make


class TestWorkedExample:
    """50h of 100h spent three weeks into a two-month project."""

    def test_forecast(self, forecast_project):
        forecast = completion_forecast(forecast_project(), date(2025, 1, 21))
        assert forecast.completion_percentage == 52
        assert forecast.remaining_hours == 50
        assert forecast.velocity_hours_per_day == 2.4
        assert forecast.projected_date == date(2025, 2, 11)
        assert forecast.days_ahead_behind == 17
        assert forecast.message == "17 days ahead of schedule"
        assert forecast.confidence is Confidence.HIGH


class TestDecisionSequence:
    """Each branch of the forecast, in order."""

    def test_no_deadline(self, forecast_project):
        forecast = completion_forecast(forecast_project(endDate=None), date(2025, 1, 21))
        assert forecast.confidence is Confidence.UNAVAILABLE
        assert forecast.message == "No deadline set"
        assert forecast.projected_date is None

    def test_not_started(self, forecast_project):
        forecast = completion_forecast(forecast_project(), date(2024, 12, 31))
        assert forecast.confidence is Confidence.UNAVAILABLE
        assert forecast.message == "Project not started"

    def test_completed(self, forecast_project):
        forecast = completion_forecast(forecast_project(status="completed"), date(2025, 3, 15))
        assert forecast.confidence is Confidence.HIGH
        assert forecast.projected_date == date(2025, 2, 28)
        assert forecast.days_ahead_behind == 0
        assert forecast.completion_percentage == 100
        assert forecast.message == "Project completed"

    def test_no_hours_logged(self, forecast_project):
        forecast = completion_forecast(forecast_project(actualHours=0), date(2025, 1, 21))
        assert forecast.confidence is Confidence.UNAVAILABLE
        assert forecast.message == "Not enough data to forecast"
        assert forecast.completion_percentage == 52
        assert forecast.remaining_hours == 100

    def test_no_progress(self, make_project, make_task):
        data = make_project(
            tasks=[make_task("a", progress=0, estimated=10)],
            actualHours=20,
            estimatedHours=80,
        )
        forecast = completion_forecast(data, date(2025, 1, 21))
        assert forecast.message == "Not enough data to forecast"
        assert forecast.remaining_hours == 80

    def test_velocity_too_low(self, forecast_project):
        forecast = completion_forecast(forecast_project(actualHours=1), date(2025, 1, 31))
        assert forecast.confidence is Confidence.LOW
        assert forecast.days_ahead_behind == VELOCITY_TOO_LOW
        assert forecast.projected_date is None
        assert forecast.message == "Velocity too low to forecast"

    def test_behind_schedule(self, forecast_project):
        data = forecast_project(endDate="2025-01-31", actualHours=10)
        forecast = completion_forecast(data, date(2025, 1, 10))
        # 1h/day with 90h left and 21 days to go
        assert forecast.velocity_hours_per_day == 1.0
        assert forecast.days_ahead_behind == -69
        assert forecast.message == "69 days behind schedule"
        assert forecast.confidence is Confidence.MEDIUM

    def test_on_start_day(self, forecast_project):
        forecast = completion_forecast(forecast_project(actualHours=8), date(2025, 1, 1))
        assert forecast.velocity_hours_per_day == 8.0
        assert forecast.confidence is Confidence.LOW

    def test_over_budget_has_no_remaining_hours(self, forecast_project):
        forecast = completion_forecast(forecast_project(actualHours=150), date(2025, 1, 21))
        assert forecast.remaining_hours == 0
        assert forecast.projected_date == date(2025, 1, 21)
        assert forecast.days_ahead_behind == 38


class TestMessages:
    """Singular and plural day wording."""

    @pytest.mark.parametrize("days,message", [
        (0, "On track to meet deadline"),
        (1, "1 day ahead of schedule"),
        (5, "5 days ahead of schedule"),
        (-1, "1 day behind schedule"),
        (-12, "12 days behind schedule"),
    ])
    def test_schedule_message(self, days, message):
        assert schedule_message(days) == message


class TestConfidence:
    """Confidence thresholds."""

    @pytest.mark.parametrize("elapsed,completion,confidence", [
        (14, 20, Confidence.HIGH),
        (13, 20, Confidence.MEDIUM),
        (14, 19, Confidence.MEDIUM),
        (7, 10, Confidence.MEDIUM),
        (6, 50, Confidence.LOW),
        (30, 9, Confidence.LOW),
    ])
    def test_thresholds(self, elapsed, completion, confidence):
        assert forecast_confidence(elapsed, completion) is confidence


class TestOutlook:
    """Display banding of days ahead/behind."""

    def _forecast(self, days, confidence=Confidence.MEDIUM):
        return CompletionForecast(
            projected_date=None,
            days_ahead_behind=days,
            velocity_hours_per_day=1,
            remaining_hours=10,
            completion_percentage=50,
            confidence=confidence,
            message="",
        )

    @pytest.mark.parametrize("days,outlook", [
        (10, Outlook.AHEAD),
        (3, Outlook.AHEAD),
        (2, Outlook.ON_TRACK),
        (0, Outlook.ON_TRACK),
        (-1, Outlook.SLIGHTLY_BEHIND),
        (-7, Outlook.SLIGHTLY_BEHIND),
        (-8, Outlook.BEHIND),
        (VELOCITY_TOO_LOW, Outlook.BEHIND),
    ])
    def test_bands(self, days, outlook):
        assert forecast_outlook(self._forecast(days)) is outlook

    def test_unavailable(self):
        assert forecast_outlook(self._forecast(0, Confidence.UNAVAILABLE)) is Outlook.UNAVAILABLE
