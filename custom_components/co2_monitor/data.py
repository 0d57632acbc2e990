"""Runtime data types for co2_monitor.

Defines the data structures used at runtime:
- SensorReading: one immutable point-in-time measurement.
- FetchError / FetchResult: structured outcome of a single fetch.
- CacheEntry: the cached state owned by the coordinator.
- RuntimeData: stored on config_entry.runtime_data during the integration's lifetime.
- IntegrationConfigEntry: typed alias for ConfigEntry[RuntimeData].
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from .const import DEFAULT_CO2_DETECTED, DEFAULT_CO2_LEVEL, CacheState, ErrorKind

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.loader import Integration

    from .coordinator import SensorStateCoordinator


# Type safety: entry.runtime_data will be of type RuntimeData
type IntegrationConfigEntry = ConfigEntry[RuntimeData]


#
# SensorReading
#
@dataclass(frozen=True, slots=True)
class SensorReading:
    """A pair of sensor values from one fetch.

    Attributes:
        co2_level: CO2 concentration in ppm (>= 0).
        co2_detected: Whether the device reports an abnormal CO2 level.
    """

    co2_level: float = DEFAULT_CO2_LEVEL
    co2_detected: bool = DEFAULT_CO2_DETECTED


# Reading served before the first successful fetch
DEFAULT_READING = SensorReading()


#
# FetchError
#
@dataclass(frozen=True, slots=True)
class FetchError:
    """Failure reported by the fetcher, with the underlying cause for logging."""

    kind: ErrorKind
    cause: Exception


#
# FetchResult
#
@dataclass(frozen=True, slots=True)
class FetchResult:
    """Outcome of one fetch. Exactly one of ``reading`` and ``error`` is set."""

    reading: SensorReading | None = None
    error: FetchError | None = None

    #
    # success
    #
    @classmethod
    def success(cls, reading: SensorReading) -> FetchResult:
        """Build a successful result."""

        return cls(reading=reading)

    #
    # failure
    #
    @classmethod
    def failure(cls, cause: Exception) -> FetchResult:
        """Build a failed result; every cause maps to ``ErrorKind.FETCH_FAILED``."""

        return cls(error=FetchError(kind=ErrorKind.FETCH_FAILED, cause=cause))


#
# CacheEntry
#
@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Cached sensor state.

    Replaced as a whole on every change so readers never see a partial update.

    Attributes:
        current: Last successfully fetched reading, or the default reading.
        last_updated_at: Time of the last successful fetch (``None`` before the first).
        last_error: Kind of the most recent failure, cleared on success.
    """

    current: SensorReading = DEFAULT_READING
    last_updated_at: datetime | None = None
    last_error: ErrorKind | None = None

    @property
    def state(self) -> CacheState:
        """Return the freshness of the cached reading."""

        if self.last_updated_at is None:
            return CacheState.DEFAULT
        if self.last_error is not None:
            return CacheState.STALE
        return CacheState.FRESH


#
# RuntimeData
#
@dataclass
class RuntimeData:
    """Data stored on config_entry.runtime_data during the integration's lifetime."""

    coordinator: SensorStateCoordinator
    integration: Integration
    config: dict[str, Any]
