"""Monthly billing scheduler.

The billing run fires once per calendar month, at 00:01 on the 1st, in a
single fixed time reference (UTC by default). The scheduler holds its own
state and receives the clock and the timer primitive at construction, so
the next-run computation stays pure and testable without real waiting.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional, Protocol

from infrastructure.logging import bind_run_context, get_module_logger
from modules.billing.domain.models import BillingRunSummary

logger = get_module_logger()


class SchedulerState(Enum):
    IDLE = "idle"
    ARMED = "armed"


class Timer(Protocol):
    """Primitive arming a one-shot callback at a given instant."""

    def schedule(self, fire_at: datetime, callback: Callable[[], None]) -> None:
        ...


class Dispatcher(Protocol):
    def run_once(self, run_id: Optional[str] = None) -> BillingRunSummary:
        ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _add_month(moment: datetime) -> datetime:
    if moment.month == 12:
        return moment.replace(year=moment.year + 1, month=1)
    return moment.replace(month=moment.month + 1)


def next_run(now: datetime) -> datetime:
    """Compute the next billing instant strictly after `now`.

    The candidate is 00:01:00 on the first day of now's month. If the
    candidate is still ahead of `now` it is the next run, otherwise the
    next run is the same instant one month later. The result keeps now's
    tzinfo.

    Example:
        next_run(2021-01-01T00:00Z) == 2021-01-01T00:01Z
        next_run(2021-01-01T00:02Z) == 2021-02-01T00:01Z
    """
    candidate = now.replace(day=1, hour=0, minute=1, second=0, microsecond=0)
    if candidate > now:
        return candidate
    return _add_month(candidate)


class BillingScheduler:
    """Self-rescheduling monthly trigger for the billing dispatcher.

    States: IDLE -> start() -> ARMED. On every fire the scheduler re-arms for
    the following month *before* running the dispatch, so a slow run never
    prevents the next period from being armed. A dispatch error is logged
    and absorbed; the schedule keeps cycling.

    Attributes:
        dispatcher: Object exposing run_once()
        timer: Timer primitive used to arm the next fire
        clock: Callable returning the current instant
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        timer: Timer,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.dispatcher = dispatcher
        self.timer = timer
        self.clock = clock
        self.state = SchedulerState.IDLE
        self.next_fire_at: Optional[datetime] = None

    def start(self) -> Optional[datetime]:
        """Arm the timer for the next billing instant.

        Calling start() while already armed keeps the existing timer.

        Returns:
            The instant the scheduler is armed for
        """
        if self.state == SchedulerState.ARMED:
            logger.info(
                "billing_scheduler_already_armed",
                next_fire_at=self._iso(self.next_fire_at),
            )
            return self.next_fire_at
        return self._arm()

    def stop(self) -> None:
        """Return to IDLE and cancel the pending timer when supported."""
        cancel = getattr(self.timer, "cancel", None)
        if callable(cancel):
            cancel()
        self.state = SchedulerState.IDLE
        self.next_fire_at = None
        logger.info("billing_scheduler_stopped")

    def _arm(self, after: Optional[datetime] = None) -> datetime:
        now = self.clock()
        # A timer firing slightly early must not re-arm for the same instant
        if after is not None and now < after:
            now = after
        fire_at = next_run(now)
        self.timer.schedule(fire_at, self._fire)
        self.state = SchedulerState.ARMED
        self.next_fire_at = fire_at
        logger.info("billing_scheduler_armed", next_fire_at=self._iso(fire_at))
        return fire_at

    def _fire(self) -> None:
        if self.state != SchedulerState.ARMED:
            return

        fired_for = self.next_fire_at
        logger.info("billing_scheduler_fired", fired_for=self._iso(fired_for))
        self._arm(after=fired_for)

        with bind_run_context(trigger="scheduler", scheduled_for=self._iso(fired_for)):
            try:
                self.dispatcher.run_once()
            except Exception as e:
                logger.error("billing_dispatch_error", error=str(e), exc_info=True)

    @staticmethod
    def _iso(moment: Optional[datetime]) -> Optional[str]:
        return moment.isoformat() if moment else None
