from datetime import datetime

import pytest
from celery import Celery
from flask import Flask, current_app

from easyguide.container import AppContainer
from easyguide.data.services.itinerary_service import ItineraryService
from easyguide.scheduler import CronExpression, MetadataScanner, SchedulerOrchestrator, SchedulerRegistry, cron


class ReportService:
    def __init__(self):
        self.runs = []

    @cron(CronExpression.EVERY_HOUR, name="hourlyReport")
    def hourly_report(self):
        self.runs.append(current_app.name)
        return len(self.runs)

    def not_scheduled(self):
        pass


@pytest.fixture
def celery_app():
    return Celery("scheduler-test", broker="memory://")


@pytest.fixture
def orchestrator(celery_app):
    return SchedulerOrchestrator(celery_app, SchedulerRegistry(), flask_app=Flask("reports"))


class TestCronDecorator:
    def test_rejects_invalid_expressions(self):
        with pytest.raises(ValueError, match="Invalid cron expression"):
            cron("every day")
        with pytest.raises(ValueError):
            cron("0 0 * * * *")

    def test_scanner_finds_only_decorated_methods(self):
        found = MetadataScanner().scan(ReportService())
        assert [(m.__name__, meta.expression) for m, meta in found] == [("hourly_report", "0 * * * *")]


class TestSchedulerOrchestrator:
    def test_explore_registers_task_and_beat_entry(self, orchestrator, celery_app):
        container = AppContainer()
        container.register("reports", lambda c: ReportService())

        jobs = orchestrator.explore(container)

        assert [job.name for job in jobs] == ["hourlyReport"]
        assert "scheduler.hourlyReport" in celery_app.tasks
        entry = celery_app.conf.beat_schedule["hourlyReport"]
        assert entry["task"] == "scheduler.hourlyReport"

    def test_task_runs_inside_app_context(self, orchestrator, celery_app):
        service = ReportService()
        container = AppContainer()
        container.register("reports", lambda c: service)
        orchestrator.explore(container)

        assert celery_app.tasks["scheduler.hourlyReport"]() == 1
        assert service.runs == ["reports"]

    def test_itinerary_cleanup_job(self, orchestrator, celery_app):
        container = AppContainer()
        container.register("itinerary_service", lambda c: ItineraryService())

        orchestrator.explore(container)

        assert celery_app.conf.beat_schedule["removeExpiredItineraries"]["task"] == "scheduler.removeExpiredItineraries"
        assert orchestrator.next_run("removeExpiredItineraries", datetime(2024, 1, 1, 10, 0)) == datetime(2024, 1, 2)

    def test_duplicate_job_names_are_rejected(self, orchestrator):
        container = AppContainer()
        container.register("a", lambda c: ReportService())
        container.register("b", lambda c: ReportService())
        with pytest.raises(ValueError, match="already exists"):
            orchestrator.explore(container)


class TestSchedulerRegistry:
    def test_lookup_and_delete(self):
        registry = SchedulerRegistry()
        registry.add_cron_job("job", object())
        registry.delete_cron_job("job")
        assert registry.get_cron_jobs() == {}
        with pytest.raises(KeyError, match="No Cron Job"):
            registry.get_cron_job("job")
