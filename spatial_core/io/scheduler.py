"""
Tick scheduling for periodic work (node expiry, fusion passes, environment checks).

Components never own timers. They expose a tick(now) entry point and a
scheduler drives it:
- ManualTickSource: deterministic, advanced explicitly (tests, replay)
- IntervalTickSource: wall-clock, one daemon thread per job
"""

import heapq
import itertools
import logging
import threading
import time
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

TickCallback = Callable[[float], None]


class CancellationToken:
    """Cooperative cancellation flag shared between a job and its owner."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to timeout seconds; True if cancelled meanwhile."""
        return self._event.wait(timeout)


class Scheduler:
    """Base class for tick sources."""

    def every(self, interval_s: float, callback: TickCallback,
              token: Optional[CancellationToken] = None) -> CancellationToken:
        """
        Run callback(now) every interval_s seconds until the token is cancelled.

        Returns:
            The token controlling the job
        """
        raise NotImplementedError

    def now(self) -> float:
        raise NotImplementedError

    def shutdown(self):
        """Cancel every job started by this scheduler."""
        raise NotImplementedError


def _run_job(callback: TickCallback, now: float):
    try:
        callback(now)
    except Exception:
        logger.exception("Scheduled job %s failed", getattr(callback, '__name__', callback))


class ManualTickSource(Scheduler):
    """
    Deterministic scheduler driven by advance().

    Usage:
        ticks = ManualTickSource(start=0.0)
        ticks.every(10.0, registry_sweep)
        ticks.advance(30.0)   # runs the sweep at t=10, 20, 30
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._seq = itertools.count()
        self._jobs: List[Tuple[float, int, float, TickCallback, CancellationToken]] = []
        self._tokens: List[CancellationToken] = []

    def now(self) -> float:
        return self._now

    def every(self, interval_s: float, callback: TickCallback,
              token: Optional[CancellationToken] = None) -> CancellationToken:
        if interval_s <= 0:
            raise ValueError(f"Interval must be positive: {interval_s}")
        token = token or CancellationToken()
        heapq.heappush(self._jobs, (self._now + interval_s, next(self._seq), interval_s, callback, token))
        self._tokens.append(token)
        return token

    def advance(self, seconds: float) -> int:
        """
        Move time forward, firing due jobs in time order.

        Returns:
            Number of callbacks run
        """
        target = self._now + seconds
        fired = 0
        while self._jobs and self._jobs[0][0] <= target:
            due, _, interval, callback, token = heapq.heappop(self._jobs)
            if token.cancelled:
                continue
            self._now = due
            _run_job(callback, due)
            fired += 1
            if not token.cancelled:
                heapq.heappush(self._jobs, (due + interval, next(self._seq), interval, callback, token))
        self._now = target
        return fired

    def shutdown(self):
        for token in self._tokens:
            token.cancel()
        self._jobs.clear()
        self._tokens.clear()


class IntervalTickSource(Scheduler):
    """
    Wall-clock scheduler; each job runs on its own daemon thread.

    The clock defaults to time.time so ticks line up with reading timestamps.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._jobs: List[Tuple[threading.Thread, CancellationToken]] = []
        self._lock = threading.Lock()

    def now(self) -> float:
        return self._clock()

    def every(self, interval_s: float, callback: TickCallback,
              token: Optional[CancellationToken] = None) -> CancellationToken:
        if interval_s <= 0:
            raise ValueError(f"Interval must be positive: {interval_s}")
        token = token or CancellationToken()

        def loop():
            while not token.wait(interval_s):
                _run_job(callback, self._clock())

        thread = threading.Thread(target=loop, name=f"tick-{getattr(callback, '__name__', 'job')}",
                                  daemon=True)
        with self._lock:
            # Drop jobs whose token was cancelled or whose thread has ended
            self._jobs = [(t, tok) for t, tok in self._jobs if t.is_alive() and not tok.cancelled]
            self._jobs.append((thread, token))
            thread.start()
        return token

    def active_jobs(self) -> int:
        """Jobs started by this scheduler that are neither cancelled nor finished."""
        with self._lock:
            return sum(1 for t, tok in self._jobs if t.is_alive() and not tok.cancelled)

    def shutdown(self, timeout: float = 1.0):
        with self._lock:
            jobs, self._jobs = self._jobs, []
        for _, token in jobs:
            token.cancel()
        for thread, _ in jobs:
            thread.join(timeout)
