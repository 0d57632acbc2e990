"""Constants for co2_monitor.

Central definitions for domain identity, refresh timing, entity keys, and enums.
All magic numbers and strings used across the integration are defined here.
"""

from __future__ import annotations

from datetime import timedelta
from enum import StrEnum
from typing import Final

# ---------------------------------------------------------------------------
# Domain identity
# ---------------------------------------------------------------------------

DOMAIN: Final[str] = "co2_monitor"
INTEGRATION_NAME: Final[str] = "CO2 Monitor"

# Home Assistant string literals
HA_OPTIONS: Final[str] = "options"

# ---------------------------------------------------------------------------
# Refresh loop
# ---------------------------------------------------------------------------

# Fixed period; not user-configurable
REFRESH_INTERVAL_SECONDS: Final[int] = 10
REFRESH_INTERVAL: Final[timedelta] = timedelta(seconds=REFRESH_INTERVAL_SECONDS)

# ---------------------------------------------------------------------------
# Remote payload fields
# ---------------------------------------------------------------------------

PAYLOAD_KEY_CO2: Final[str] = "co2"
PAYLOAD_KEY_CO2_DETECTED: Final[str] = "co2Detected"

# Values used when a field is missing from the payload
DEFAULT_CO2_LEVEL: Final[float] = 0.0
DEFAULT_CO2_DETECTED: Final[bool] = False

# ---------------------------------------------------------------------------
# Entity keys (also the push notification keys)
# ---------------------------------------------------------------------------

SENSOR_KEY_CO2_LEVEL: Final[str] = "co2_level"
BINARY_SENSOR_KEY_CO2_DETECTED: Final[str] = "co2_detected"

# Extra state attributes of the CO2 level sensor
ATTR_LAST_UPDATED: Final[str] = "last_updated"
ATTR_LAST_ERROR: Final[str] = "last_error"

# ---------------------------------------------------------------------------
# Device information
# ---------------------------------------------------------------------------

DEVICE_MANUFACTURER: Final[str] = "Default-Manufacturer"
DEVICE_MODEL: Final[str] = "Carbon Dioxide Monitor"

# ---------------------------------------------------------------------------
# Config flow error / abort translation keys
# ---------------------------------------------------------------------------

ERROR_INVALID_URL: Final[str] = "invalid_url"
ERROR_ENDPOINT_IN_USE: Final[str] = "endpoint_in_use"
ABORT_ALREADY_CONFIGURED: Final[str] = "already_configured"

# ---------------------------------------------------------------------------
# Error kinds
# ---------------------------------------------------------------------------


#
# ErrorKind
#
class ErrorKind(StrEnum):
    """Failure kinds reported by the fetcher.

    All transport, status, and parse failures are folded into one kind.
    """

    FETCH_FAILED = "fetch_failed"


# ---------------------------------------------------------------------------
# Cache state
# ---------------------------------------------------------------------------


#
# CacheState
#
class CacheState(StrEnum):
    """Freshness of the cached reading."""

    DEFAULT = "default"  # No successful fetch yet
    FRESH = "fresh"  # Last refresh succeeded
    STALE = "stale"  # Last refresh failed, previous reading kept
