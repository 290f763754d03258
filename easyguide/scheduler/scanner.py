# easyguide/scheduler/scanner.py
import inspect

from easyguide.scheduler.decorators import CRON_ATTR


class MetadataScanner:
    """Find cron-decorated methods on service instances."""

    def scan(self, instance):
        found = []
        for attr_name, attr in inspect.getmembers(type(instance), predicate=inspect.isfunction):
            metadata = getattr(attr, CRON_ATTR, None)
            if metadata is not None:
                found.append((getattr(instance, attr_name), metadata))
        return found
