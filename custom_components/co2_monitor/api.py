"""Remote reading fetcher.

Performs one HTTP GET against the configured endpoint and turns the JSON
response into a ``SensorReading``. Expected payload::

    {"co2": <number>, "co2Detected": <boolean>}

Fields are read independently: a missing (or ``null``) ``co2`` reads as 0 and a
missing ``co2Detected`` reads as ``False``. A field that is present but of the
wrong type is a parse error.

Every failure (transport, timeout, non-2xx status, undecodable body, parse
error) is returned as ``FetchResult.failure``; nothing is raised to the caller
and nothing is retried.
"""

from __future__ import annotations

import math
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

import aiohttp

from .const import (
    DEFAULT_CO2_DETECTED,
    DEFAULT_CO2_LEVEL,
    PAYLOAD_KEY_CO2,
    PAYLOAD_KEY_CO2_DETECTED,
)
from .data import FetchResult, SensorReading

if TYPE_CHECKING:
    from .log import Log


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------


#
# CO2MonitorApiError
#
class CO2MonitorApiError(Exception):
    """Base class for fetcher errors."""


#
# HttpStatusError
#
class HttpStatusError(CO2MonitorApiError):
    """The endpoint answered with a non-2xx status."""

    #
    # __init__
    #
    def __init__(self, status: int) -> None:
        """Initialize with the HTTP status code."""

        super().__init__(f"Unexpected HTTP status {status}")
        self.status = status


#
# InvalidPayloadError
#
class InvalidPayloadError(CO2MonitorApiError):
    """The response body does not match the expected payload shape."""

    #
    # __init__
    #
    def __init__(self, reason: str) -> None:
        """Initialize with a description of what is wrong."""

        super().__init__(f"Invalid payload: {reason}")
        self.reason = reason


# ---------------------------------------------------------------------------
# Payload parsing
# ---------------------------------------------------------------------------


#
# parse_reading
#
def parse_reading(payload: Any) -> SensorReading:
    """Convert a decoded JSON payload into a ``SensorReading``.

    Args:
        payload: Decoded response body.

    Returns:
        The reading, with missing fields defaulted.

    Raises:
        InvalidPayloadError: If the payload is not an object or a field has the wrong type.
    """

    if not isinstance(payload, dict):
        raise InvalidPayloadError(f"expected an object, got {type(payload).__name__}")

    raw_level = payload.get(PAYLOAD_KEY_CO2)
    if raw_level is None:
        co2_level = DEFAULT_CO2_LEVEL
    elif isinstance(raw_level, bool) or not isinstance(raw_level, (int, float)):
        raise InvalidPayloadError(f"'{PAYLOAD_KEY_CO2}' is not a number: {raw_level!r}")
    else:
        try:
            co2_level = float(raw_level)
        except OverflowError as err:
            # JSON integers are unbounded; floats are not
            raise InvalidPayloadError(f"'{PAYLOAD_KEY_CO2}' is out of range: {err}") from err
        if not math.isfinite(co2_level) or co2_level < 0:
            raise InvalidPayloadError(f"'{PAYLOAD_KEY_CO2}' is out of range: {raw_level!r}")

    raw_detected = payload.get(PAYLOAD_KEY_CO2_DETECTED)
    if raw_detected is None:
        co2_detected = DEFAULT_CO2_DETECTED
    elif isinstance(raw_detected, bool):
        co2_detected = raw_detected
    else:
        raise InvalidPayloadError(f"'{PAYLOAD_KEY_CO2_DETECTED}' is not a boolean: {raw_detected!r}")

    return SensorReading(co2_level=co2_level, co2_detected=co2_detected)


# ---------------------------------------------------------------------------
# SensorApiClient
# ---------------------------------------------------------------------------


#
# SensorApiClient
#
class SensorApiClient:
    """Fetches readings from the remote sensor endpoint.

    Stateless apart from its configuration; each call is a single attempt.
    """

    #
    # __init__
    #
    def __init__(self, session: aiohttp.ClientSession, endpoint: str, logger: Log) -> None:
        """Initialize the client.

        Args:
            session: Shared aiohttp session (transport defaults apply, incl. timeout).
            endpoint: Absolute URL of the sensor endpoint.
            logger: Instance-specific logger with entry_id prefix.
        """

        self._session = session
        self._endpoint = endpoint
        self._logger = logger

    @property
    def endpoint(self) -> str:
        """Return the configured endpoint URL."""

        return self._endpoint

    #
    # async_fetch
    #
    async def async_fetch(self) -> FetchResult:
        """Fetch and parse one reading.

        Returns:
            ``FetchResult.success`` with the reading, or ``FetchResult.failure``
            carrying the underlying cause.
        """

        try:
            async with self._session.get(self._endpoint) as response:
                if not HTTPStatus.OK <= response.status < HTTPStatus.MULTIPLE_CHOICES:
                    raise HttpStatusError(response.status)

                # Accept any content type; some devices serve JSON as text/plain
                payload = await response.json(content_type=None)

            reading = parse_reading(payload)
        except (aiohttp.ClientError, TimeoutError, ValueError, RecursionError, CO2MonitorApiError) as err:
            # RecursionError comes from decoding deeply nested bodies
            self._logger.debug("Fetch from %s failed: %r", self._endpoint, err)
            return FetchResult.failure(err)

        self._logger.debug("Fetched from %s: %s", self._endpoint, reading)
        return FetchResult.success(reading)
