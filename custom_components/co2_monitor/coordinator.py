"""CO2 monitor coordinator: sensor-state cache and refresh loop.

Owns the last-known-good ``SensorReading`` and serves it to entities:

- **Pull**: ``read_co2_level`` / ``read_co2_detected`` answer from the cache
  and never touch the network.
- **Push**: listeners registered per field key are notified after every
  successful refresh, one notification per field.

The refresh loop is driven by a ``RefreshTimer`` with a fixed period. Each tick:

 1. Skip (and log) if the previous fetch is still outstanding.
 2. Fetch one reading from the remote endpoint.
 3. On success, replace the cache entry and push both fields.
 4. On failure, keep the cached reading, record the error kind, and log.
    Nothing is pushed and nothing is raised.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.core import CALLBACK_TYPE, callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.event import async_track_time_interval
from homeassistant.util import dt as dt_util

from .api import SensorApiClient
from .config import resolve_entry
from .const import (
    BINARY_SENSOR_KEY_CO2_DETECTED,
    DOMAIN,
    REFRESH_INTERVAL,
    SENSOR_KEY_CO2_LEVEL,
    CacheState,
)
from .data import CacheEntry, FetchResult
from .log import Log

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .data import IntegrationConfigEntry

# Push callback: receives the new value of the field it subscribed to
type ValueListener = Callable[[Any], None]


# ---------------------------------------------------------------------------
# RefreshTimer
# ---------------------------------------------------------------------------


#
# RefreshTimer
#
class RefreshTimer:
    """Fixed-period timer owned by the coordinator.

    Thin wrapper around ``async_track_time_interval`` with an explicit
    start/stop lifecycle.
    """

    #
    # __init__
    #
    def __init__(
        self,
        hass: HomeAssistant,
        interval: timedelta,
        action: Callable[[datetime], None],
        name: str,
    ) -> None:
        """Initialize the timer (not started).

        Args:
            hass: Home Assistant instance.
            interval: Period between fires.
            action: Callback invoked on the event loop with the fire time.
            name: Name of the tracker, shown in HA debug output.
        """

        self._hass = hass
        self._interval = interval
        self._action = action
        self._name = name
        self._unsub: CALLBACK_TYPE | None = None

    @property
    def interval(self) -> timedelta:
        """Return the timer period."""

        return self._interval

    @property
    def is_running(self) -> bool:
        """Return ``True`` while the timer is scheduled."""

        return self._unsub is not None

    #
    # start
    #
    @callback
    def start(self) -> None:
        """Start firing every interval. No-op if already running."""

        if self._unsub is not None:
            return

        self._unsub = async_track_time_interval(
            self._hass,
            self._action,
            self._interval,
            name=self._name,
            cancel_on_shutdown=True,
        )

    #
    # stop
    #
    @callback
    def stop(self) -> None:
        """Stop the timer. No-op if not running."""

        if self._unsub is None:
            return

        self._unsub()
        self._unsub = None


# ---------------------------------------------------------------------------
# SensorStateCoordinator
# ---------------------------------------------------------------------------


#
# SensorStateCoordinator
#
class SensorStateCoordinator:
    """Cache of the latest sensor reading plus the timer-driven refresh loop.

    Single writer (the refresh loop), many readers (entities). The cache entry
    is immutable and replaced as a whole on every change.
    """

    #
    # __init__
    #
    def __init__(self, hass: HomeAssistant, config_entry: IntegrationConfigEntry) -> None:
        """Initialize the coordinator and start the refresh timer.

        The first refresh happens one interval after construction; until then
        pull reads return the default reading.

        Args:
            hass: Home Assistant instance.
            config_entry: The integration's config entry.
        """

        # Instance-specific logger
        self._logger = Log(entry_id=config_entry.entry_id)

        self.hass = hass
        self.config_entry = config_entry

        resolved = resolve_entry(config_entry)
        if not resolved.endpoint:
            raise ValueError("No endpoint configured")

        self._client = SensorApiClient(async_get_clientsession(hass), resolved.endpoint, self._logger)

        self._entry = CacheEntry()
        self._refresh_in_progress = False
        self._listeners: dict[str, list[ValueListener]] = {}

        self._timer = RefreshTimer(
            hass,
            REFRESH_INTERVAL,
            self._async_handle_timer,
            name=f"{DOMAIN} refresh {config_entry.entry_id}",
        )
        self._timer.start()

        self._logger.info(
            "Coordinator initialized: endpoint=%s, refresh_interval=%s s",
            resolved.endpoint,
            REFRESH_INTERVAL.total_seconds(),
        )

    # ------------------------------------------------------------------
    # Pull queries
    # ------------------------------------------------------------------

    #
    # read_co2_level
    #
    def read_co2_level(self) -> float:
        """Return the cached CO2 level (ppm). Never fetches."""

        return self._entry.current.co2_level

    #
    # read_co2_detected
    #
    def read_co2_detected(self) -> bool:
        """Return the cached CO2-detected flag. Never fetches."""

        return self._entry.current.co2_detected

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    @property
    def cache_entry(self) -> CacheEntry:
        """Return the current cache entry."""

        return self._entry

    @property
    def state(self) -> CacheState:
        """Return the freshness of the cached reading."""

        return self._entry.state

    @property
    def refresh_in_progress(self) -> bool:
        """Return ``True`` while a fetch is outstanding."""

        return self._refresh_in_progress

    @property
    def endpoint(self) -> str:
        """Return the configured endpoint URL."""

        return self._client.endpoint

    @property
    def timer(self) -> RefreshTimer:
        """Return the refresh timer."""

        return self._timer

    # ------------------------------------------------------------------
    # Push channel
    # ------------------------------------------------------------------

    #
    # async_add_listener
    #
    @callback
    def async_add_listener(self, update_callback: ValueListener, key: str) -> CALLBACK_TYPE:
        """Register a push callback for one field.

        Args:
            update_callback: Called with the new value after each successful refresh.
            key: Field key (``co2_level`` or ``co2_detected``).

        Returns:
            Callback that removes the listener.
        """

        self._listeners.setdefault(key, []).append(update_callback)

        @callback
        def remove_listener() -> None:
            listeners = self._listeners.get(key, [])
            if update_callback in listeners:
                listeners.remove(update_callback)

        return remove_listener

    #
    # _async_notify
    #
    @callback
    def _async_notify(self, key: str, value: Any) -> None:
        """Push one field value to its listeners."""

        for update_callback in list(self._listeners.get(key, [])):
            update_callback(value)

    # ------------------------------------------------------------------
    # Refresh loop
    # ------------------------------------------------------------------

    #
    # _async_handle_timer
    #
    @callback
    def _async_handle_timer(self, now: datetime) -> None:
        """Timer callback: run one tick in an entry-scoped background task."""

        self.config_entry.async_create_background_task(
            self.hass,
            self.async_tick(),
            name=f"{DOMAIN} tick {self.config_entry.entry_id}",
        )

    #
    # async_tick
    #
    async def async_tick(self) -> bool:
        """Run one refresh cycle.

        Returns:
            ``True`` if a fetch was performed, ``False`` if the tick was skipped
            because the previous fetch is still outstanding.
        """

        # Check-and-set happens before the first await: at most one fetch in flight
        if self._refresh_in_progress:
            self._logger.warning("Previous fetch from %s still in progress, skipping this tick", self.endpoint)
            return False

        self._refresh_in_progress = True
        try:
            result = await self._client.async_fetch()
        finally:
            self._refresh_in_progress = False

        self._async_apply_result(result)
        return True

    #
    # _async_apply_result
    #
    @callback
    def _async_apply_result(self, result: FetchResult) -> None:
        """Update the cache from a fetch result."""

        error = result.error
        if error is not None:
            # Failure: keep the cached reading, record the error, don't push
            self._entry = replace(self._entry, last_error=error.kind)
            self._logger.warning(
                "Fetching from %s failed (%s): %s; keeping cached reading %s",
                self.endpoint,
                error.kind,
                error.cause,
                self._entry.current,
            )
            return

        reading = result.reading
        if reading is None:
            return

        self._entry = CacheEntry(current=reading, last_updated_at=dt_util.utcnow(), last_error=None)
        self._logger.info("CO2 reading updated: %s ppm, detected=%s", reading.co2_level, reading.co2_detected)

        self._async_notify(SENSOR_KEY_CO2_LEVEL, reading.co2_level)
        self._async_notify(BINARY_SENSOR_KEY_CO2_DETECTED, reading.co2_detected)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    #
    # async_shutdown
    #
    @callback
    def async_shutdown(self) -> None:
        """Stop the refresh timer. The cached reading stays readable."""

        self._timer.stop()
        self._logger.debug("Refresh timer stopped")
