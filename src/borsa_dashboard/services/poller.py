"""Interval polling of a quote source with stale-snapshot retention.

Adapted from the provider polling loop: one fetch per interval, stopped by a
flag rather than by the consumer. Each fetch is tagged with a tick number and
only applied if it is newer than the tick currently applied, so a slow early
response can never overwrite a faster later one.
"""
import asyncio
import logging
from collections.abc import Awaitable, Callable

from borsa_dashboard.providers.core import ProviderErrorMapper
from borsa_dashboard.schemas import QuoteSnapshot
from borsa_dashboard.utils import utcnow

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[QuoteSnapshot], None]


class PricePoller:
    """Cancellable repeating fetch; keeps the last good snapshot.

    start() fetches once immediately and then every interval. A scheduled
    tick that fires while a fetch is still in flight is skipped. refresh()
    forces a fetch regardless; the tick guard keeps the result ordering safe.
    After stop() nothing is applied, even if an in-flight fetch completes.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[QuoteSnapshot]],
        interval_seconds: float,
        *,
        timeout_seconds: float | None = None,
        error_mapper: ProviderErrorMapper | None = None,
        name: str = "prices",
    ) -> None:
        self._fetch = fetch
        self._interval = interval_seconds
        self._timeout = timeout_seconds
        self._error_mapper = error_mapper or ProviderErrorMapper()
        self.name = name

        self._issued_tick = 0
        self._applied_tick = 0
        self._failed_tick = 0
        self._in_flight = 0
        self._stopped = False
        self._loop_task: asyncio.Task | None = None
        self._fetch_tasks: set[asyncio.Task] = set()
        self._listeners: list[SnapshotListener] = []

        self.snapshot: QuoteSnapshot | None = None
        self.last_fetch_at = None
        self.error: str | None = None
        self.stale = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight > 0

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def applied_tick(self) -> int:
        return self._applied_tick

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Call listener with every applied snapshot. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> None:
        """Begin polling. A second start() while running is a no-op (no duplicate timers)."""
        if self.running:
            return
        self._stopped = False
        self._loop_task = asyncio.create_task(self._run(), name=f"poller-{self.name}")

    def stop(self) -> None:
        """Stop polling; results of fetches still in flight are discarded on arrival."""
        self._stopped = True
        if self._loop_task is not None:
            self._loop_task.cancel()
            self._loop_task = None

    async def aclose(self) -> None:
        """Stop and wait for outstanding fetches to settle."""
        self.stop()
        pending = list(self._fetch_tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    def tick(self) -> asyncio.Task | None:
        """Scheduled tick: skipped while a previous fetch is in flight."""
        if self.in_flight:
            logger.debug("Poller %s: previous fetch in flight, skipping tick", self.name)
            return None
        return self.refresh()

    def refresh(self) -> asyncio.Task | None:
        """Issue a fetch now, tagged with the next tick number."""
        if self._stopped:
            return None
        self._issued_tick += 1
        task = asyncio.create_task(self._fetch_and_apply(self._issued_tick))
        self._fetch_tasks.add(task)
        task.add_done_callback(self._fetch_tasks.discard)
        return task

    async def _run(self) -> None:
        while not self._stopped:
            self.tick()
            await asyncio.sleep(self._interval)

    async def _fetch_and_apply(self, tick: int) -> None:
        self._in_flight += 1
        try:
            if self._timeout is not None:
                snapshot = await asyncio.wait_for(self._fetch(), timeout=self._timeout)
            else:
                snapshot = await self._fetch()
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            self._record_failure(tick, exc)
        else:
            self.apply(tick, snapshot)
        finally:
            self._in_flight -= 1

    def apply(self, tick: int, snapshot: QuoteSnapshot) -> bool:
        """Apply snapshot if tick is newer than the applied one. Returns whether it was applied."""
        if self._stopped:
            logger.debug("Poller %s stopped, discarding tick %d", self.name, tick)
            return False
        if tick <= self._applied_tick:
            logger.debug(
                "Poller %s: discarding tick %d (applied %d)", self.name, tick, self._applied_tick
            )
            return False
        self._applied_tick = tick
        self.snapshot = snapshot
        self.last_fetch_at = utcnow()
        # A failure from a newer tick keeps error and stale set.
        if self._failed_tick < tick:
            self.error = None
            self.stale = snapshot.degraded
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Poller %s listener failed", self.name)
        return True

    def _record_failure(self, tick: int, exc: Exception) -> None:
        if self._stopped or tick <= self._applied_tick:
            return
        self._failed_tick = max(self._failed_tick, tick)
        _, detail = self._error_mapper.to_http(exc)
        logger.warning("Poller %s tick %d failed: %s (%s)", self.name, tick, detail, exc)
        self.error = detail
        self.stale = True
