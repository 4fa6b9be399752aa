from __future__ import annotations

import logging
import socket
from datetime import datetime
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler

from eunoia.service.daily_fetch_service import DailyWordFetcher

logger = logging.getLogger(__name__)

JOB_ID = "daily_word_fetch"


def has_network(host: str = "generativelanguage.googleapis.com", port: int = 443, timeout: float = 3.0) -> bool:
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


class DailyFetchScheduler:
    """Runs the daily fetch at a fixed local time, and on demand."""

    def __init__(
        self,
        fetcher: DailyWordFetcher,
        hour: int = 9,
        minute: int = 0,
        network_check: Callable[[], bool] = has_network,
        scheduler: BackgroundScheduler | None = None,
    ):
        self.fetcher = fetcher
        self.hour = hour
        self.minute = minute
        self.network_check = network_check
        self.scheduler = scheduler or BackgroundScheduler()

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self) -> None:
        self.scheduler.add_job(
            self.run_job,
            trigger="cron",
            hour=self.hour,
            minute=self.minute,
            id=JOB_ID,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        if not self.scheduler.running:
            self.scheduler.start()
        logger.info("Daily word fetch scheduled at %02d:%02d", self.hour, self.minute)

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)

    def fetch_now(self) -> None:
        """Queue a forced one-shot run."""
        self.scheduler.add_job(self.run_job, trigger="date", run_date=datetime.now(), kwargs={"force": True})

    def run_job(self, force: bool = False) -> None:
        if not self.network_check():
            logger.warning("No network connection; word fetch skipped")
            return
        try:
            self.fetcher.run(force=force)
        except Exception:
            logger.exception("Daily word fetch crashed")
