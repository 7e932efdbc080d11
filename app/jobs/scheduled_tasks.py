"""Background scheduling for the billing application.

The `schedule` library drives every timed job. Billing uses it as a one-shot
timer: each arming registers a job that checks the UTC clock, fires once
the instant is reached, then cancels itself. The billing scheduler re-arms
for the following month.
"""

import threading
import time
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

import schedule

from infrastructure.logging import get_module_logger
from modules.billing.scheduler import utc_now

if TYPE_CHECKING:
    from modules.billing.service import BillingService

logger = get_module_logger()

BILLING_JOB_TAG = "billing-run"


def safe_run(job):
    def wrapper(*args, **kwargs):
        try:
            return job(*args, **kwargs)
        except Exception as e:
            logger.error(
                "scheduled_job_error",
                job=getattr(job, "__name__", "unknown"),
                error=str(e),
                exc_info=True,
            )

    return wrapper


class ScheduleTimer:
    """Timer primitive arming one-shot `schedule` jobs at a given instant.

    `schedule` keeps its own bookkeeping in naive host-local time, which
    shifts across daylight saving changes. The armed job therefore only
    polls: it fires once the injected UTC clock reaches the instant, then
    cancels itself.
    """

    def __init__(
        self,
        scheduler: Optional[schedule.Scheduler] = None,
        clock: Callable[[], datetime] = utc_now,
        tag: str = BILLING_JOB_TAG,
        check_interval_seconds: int = 1,
    ) -> None:
        if check_interval_seconds < 1:
            raise ValueError("check_interval_seconds must be at least 1")
        self.scheduler = scheduler or schedule.default_scheduler
        self.clock = clock
        self.tag = tag
        self.check_interval_seconds = check_interval_seconds

    def schedule(self, fire_at: datetime, callback: Callable[[], None]) -> schedule.Job:
        guarded = safe_run(callback)

        def fire_when_due():
            if self.clock() < fire_at:
                return None
            guarded()
            return schedule.CancelJob

        logger.debug(
            "timer_armed",
            fire_at=fire_at.isoformat(),
            check_interval_seconds=self.check_interval_seconds,
        )
        return (
            self.scheduler.every(self.check_interval_seconds)
            .seconds.do(fire_when_due)
            .tag(self.tag)
        )

    def cancel(self) -> None:
        self.scheduler.clear(self.tag)


def scheduler_heartbeat():
    logger.info("scheduler_heartbeat", at=time.ctime())


def init(billing_service: "BillingService", scheduler: Optional[schedule.Scheduler] = None):
    """Register the periodic jobs and arm the billing scheduler."""
    logger.info("scheduled_tasks_initialized")
    scheduler = scheduler or schedule.default_scheduler

    scheduler.every(5).minutes.do(safe_run(scheduler_heartbeat))
    billing_service.start_scheduling()


def run_continuously(
    interval: int = 1, scheduler: Optional[schedule.Scheduler] = None
) -> threading.Event:
    """Continuously run, while executing pending jobs at each
    elapsed time interval.
    @return cease_continuous_run: threading. Event which can
    be set to cease continuous run. Please note that it is
    *intended behavior that run_continuously() does not run
    missed jobs*. For example, if you've registered a job that
    should run every minute and you set a continuous run
    interval of one hour then your job won't be run 60 times
    at each interval but only once.
    """
    cease_continuous_run = threading.Event()
    scheduler = scheduler or schedule.default_scheduler

    class ScheduleThread(threading.Thread):
        def run(self):
            while not cease_continuous_run.is_set():
                scheduler.run_pending()
                time.sleep(interval)

    continuous_thread = ScheduleThread(name="schedule-loop", daemon=True)
    continuous_thread.start()
    return cease_continuous_run
