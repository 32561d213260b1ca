"""Dashboard poller background task."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Set
from urllib.error import HTTPError, URLError

from ..api.metrics_client import MetricsApiClient, MetricsApiError
from ..api.schemas import MetricSnapshot
from ..core.config import DashboardConfig

logger = logging.getLogger("hostdash.poller")

CREDENTIAL_MISSING = "API key not found"
FETCH_FAILED = "Failed to fetch metrics"


@dataclass
class DashboardState:
    """Everything the page can show: latest snapshot, error banner, loading flag."""
    snapshot: Optional[MetricSnapshot] = None
    error: str = ""
    loading: bool = False


class DashboardPoller:
    """
    Fetches the host snapshot now and then every `config.interval` seconds.

    Each tick launches its fetch as a separate task, so a slow API can have
    several fetches in flight; whichever finishes last sets the state.
    With `config.skip_if_busy` a tick is skipped while a fetch is outstanding.
    """

    def __init__(self, config: DashboardConfig, client: MetricsApiClient,
                 state: Optional[DashboardState] = None,
                 on_stop: Optional[Callable[[], None]] = None):
        self.config = config
        self.client = client
        self.state = state if state is not None else DashboardState()
        self._on_stop = on_stop
        self._timer: Optional[asyncio.Task] = None
        self._in_flight: Set[asyncio.Task] = set()
        self._failing = False

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def fetch_snapshot(self) -> None:
        """Fetch one snapshot and update the dashboard state."""
        state = self.state
        if not self.config.has_credential:
            state.error = CREDENTIAL_MISSING
            logger.debug("no API key configured, skipping fetch")
            return

        state.loading = True
        state.error = ""
        loop = asyncio.get_running_loop()
        try:
            # blocking urllib read runs in the default executor
            snapshot = await loop.run_in_executor(None, self.client.get_snapshot, self.config.hostname)
            state.snapshot = snapshot
            if self._failing:
                logger.info("metrics API reachable again: %s", self.config.api_url)
                self._failing = False
            logger.debug("fetched snapshot id=%s for %s", snapshot.id, snapshot.hostname)
        except HTTPError as e:
            self._record_failure()
            # body excerpt was read by the client inside the executor
            msg = getattr(e, "body_excerpt", None) or str(e)
            logger.warning("HTTP %s from metrics API: %s", getattr(e, "code", "?"), msg)
        except URLError as e:
            self._record_failure()
            logger.warning("failed to reach metrics API %s: %s", self.config.api_url, e.reason)
        except (MetricsApiError, OSError) as e:
            self._record_failure()
            logger.warning("metrics fetch failed: %s", e)
        except Exception as e:
            self._record_failure()
            logger.exception("unexpected error during metrics fetch: %s", e)
        finally:
            state.loading = False

    def _record_failure(self) -> None:
        self._failing = True
        self.state.error = FETCH_FAILED
        if self.config.clear_on_error:
            self.state.snapshot = None

    def _launch_fetch(self) -> None:
        if self.config.skip_if_busy and self._in_flight:
            logger.debug("previous fetch still in flight, skipping this tick")
            return
        task = asyncio.create_task(self.fetch_snapshot())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run(self) -> None:
        interval = max(0.01, float(self.config.interval))
        while True:
            self._launch_fetch()
            await asyncio.sleep(interval)

    def start(self) -> asyncio.Task:
        """
        Start polling: one fetch right away, then one per interval.

        Returns:
            The timer task, which doubles as the cancellation handle
        """
        if self.running:
            return self._timer
        logger.info("poller starting; fetching %s for host '%s' every %ss",
                    self.config.api_url, self.config.hostname, self.config.interval)
        self._timer = asyncio.create_task(self._run())
        return self._timer

    async def stop(self) -> None:
        """
        Stop the timer and release chart resources.

        In-flight fetches are not cancelled; they may still update the state.
        """
        if self._timer is not None:
            self._timer.cancel()
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
            self._timer = None
            logger.info("poller stopped")
        if self._on_stop is not None:
            self._on_stop()
