"""
Fixed-window rate limiter.

Per-client admission control for public endpoints. Each client key owns a
counter that resets once the current window has passed, so a client can
issue up to twice the limit across a window boundary. State lives in the
limiter instance only; nothing is persisted or shared between processes.

Dependencies: asyncio, time
System role: Admission control for the knowledge and chat endpoints
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class RateRecord:
    """Counter for one client key within its current window."""

    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of an admission check."""

    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    retry_after_seconds: int


class FixedWindowRateLimiter:
    """
    In-process fixed-window limiter with a background sweep.

    Construct one instance per protected surface and inject it into handlers.
    Call start() from the application lifespan to begin sweeping expired
    records, and stop() on shutdown.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        sweep_interval_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
        name: str = "default",
    ) -> None:
        """
        Initialize the limiter.

        Args:
            limit: Requests admitted per window per client key
            window_seconds: Window length in seconds
            sweep_interval_seconds: Period of the expired-record sweep
            clock: Monotonic time source in seconds
            name: Label used in log messages
        """
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self.sweep_interval_seconds = sweep_interval_seconds
        self.name = name
        self._clock = clock
        self._records: dict[str, RateRecord] = {}
        self._sweep_task: asyncio.Task | None = None

    def check(self, client_key: str) -> RateLimitDecision:
        """
        Count a request for client_key and decide whether to admit it.

        Args:
            client_key: Client identity (IP address, session ID, ...)

        Returns:
            RateLimitDecision: Admission result with header values
        """
        now = self._clock()
        record = self._records.get(client_key)

        if record is None or now > record.reset_at:
            record = RateRecord(count=1, reset_at=now + self.window_seconds)
            self._records[client_key] = record
            return self._decision(True, record, now)

        if record.count >= self.limit:
            logger.warning(
                f"{__name__}:check - [{self.name}] limit exceeded for client={client_key}"
            )
            return self._decision(False, record, now)

        record.count += 1
        return self._decision(True, record, now)

    def admit(self, client_key: str) -> bool:
        """Return True when the request for client_key is within its limit."""
        return self.check(client_key).allowed

    def _decision(self, allowed: bool, record: RateRecord, now: float) -> RateLimitDecision:
        retry_after = max(0, int(record.reset_at - now + 0.999)) if not allowed else 0
        return RateLimitDecision(
            allowed=allowed,
            limit=self.limit,
            remaining=max(0, self.limit - record.count),
            reset_at=record.reset_at,
            retry_after_seconds=retry_after,
        )

    def sweep(self) -> int:
        """
        Remove records whose window has passed.

        Returns:
            int: Number of records removed
        """
        now = self._clock()
        expired = [key for key, record in self._records.items() if now > record.reset_at]
        for key in expired:
            del self._records[key]
        if expired:
            logger.debug(f"{__name__}:sweep - [{self.name}] removed {len(expired)} records")
        return len(expired)

    def __len__(self) -> int:
        return len(self._records)

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval_seconds)
            try:
                self.sweep()
            except Exception as exc:
                logger.warning(f"{__name__}:_sweep_loop - [{self.name}] sweep error: {exc}")

    def start(self) -> None:
        """Start the background sweep task on the running event loop."""
        if self._sweep_task is not None or self.sweep_interval_seconds <= 0:
            return
        self._sweep_task = asyncio.create_task(self._sweep_loop())
        logger.info(
            f"{__name__}:start - [{self.name}] sweep every {self.sweep_interval_seconds}s"
        )

    async def stop(self) -> None:
        """Cancel the background sweep task and wait for it to finish."""
        if self._sweep_task is None:
            return
        self._sweep_task.cancel()
        try:
            await self._sweep_task
        except asyncio.CancelledError:
            pass
        self._sweep_task = None
