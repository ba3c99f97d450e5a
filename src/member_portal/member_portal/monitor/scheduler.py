"""Periodic re-evaluation of the organization clock.

Uses APScheduler to run OrgClockMonitor.tick once a minute. The scheduler is
owned here and must be stopped with shutdown_monitor() on teardown.
"""

from __future__ import annotations

import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..core.constants import RECHECK_INTERVAL_SECONDS
from .clock import OrgClockMonitor

logger = logging.getLogger(__name__)

JOB_ID = "org_clock_tick"

scheduler: Optional[BackgroundScheduler] = None


def init_monitor(monitor: OrgClockMonitor, *, interval_seconds: int = RECHECK_INTERVAL_SECONDS) -> BackgroundScheduler:
    global scheduler

    if scheduler is not None:
        logger.warning("Clock monitor already running")
        return scheduler

    monitor.tick()

    scheduler = BackgroundScheduler(
        timezone="UTC",
        job_defaults={
            "coalesce": True,
            "max_instances": 1,
            "misfire_grace_time": interval_seconds,
        },
    )
    scheduler.add_job(
        func=monitor.tick,
        trigger=IntervalTrigger(seconds=interval_seconds),
        id=JOB_ID,
        name="Re-evaluate feedback window and org date",
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Scheduled job: %s (every %d seconds)", JOB_ID, interval_seconds)
    return scheduler


def shutdown_monitor() -> None:
    global scheduler

    if scheduler is None:
        return
    scheduler.shutdown(wait=False)
    scheduler = None
    logger.info("Clock monitor stopped")
