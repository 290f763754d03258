# easyguide/scheduler/__init__.py
from easyguide.scheduler.decorators import CronExpression, CronMetadata, cron
from easyguide.scheduler.orchestrator import SchedulerOrchestrator
from easyguide.scheduler.registry import SchedulerRegistry
from easyguide.scheduler.scanner import MetadataScanner

__all__ = [
    "CronExpression",
    "CronMetadata",
    "cron",
    "MetadataScanner",
    "SchedulerOrchestrator",
    "SchedulerRegistry",
]
