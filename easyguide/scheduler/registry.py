# easyguide/scheduler/registry.py
from typing import Dict


class SchedulerRegistry:
    def __init__(self):
        self._cron_jobs: Dict[str, object] = {}

    def add_cron_job(self, name: str, job) -> None:
        if name in self._cron_jobs:
            raise ValueError(f"Cron Job with the given name ({name}) already exists.")
        self._cron_jobs[name] = job

    def get_cron_job(self, name: str):
        try:
            return self._cron_jobs[name]
        except KeyError:
            raise KeyError(f"No Cron Job was found with the given name ({name}).") from None

    def delete_cron_job(self, name: str) -> None:
        self.get_cron_job(name)
        del self._cron_jobs[name]

    def get_cron_jobs(self) -> Dict[str, object]:
        return dict(self._cron_jobs)
