"""Settings registry and resolution for co2_monitor.

This module defines a typo-safe enum of setting keys, a registry of specs with
defaults and coercion, and helpers to resolve effective settings from a
ConfigEntry (options → defaults).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any, Callable, Generic, Mapping, TypeVar

from custom_components.co2_monitor.const import HA_OPTIONS

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class _ConfSpec(Generic[T]):
    """Metadata for a configuration setting.

    Attributes:
    - default: The default value for the setting.
    - converter: A callable that converts a raw value to the desired type T.
    """

    default: T
    converter: Callable[[Any], T]

    def __post_init__(self) -> None:
        """Validate that default is not None."""

        # Disallow None default values to ensure ResolvedConfig fields are always concrete.
        if self.default is None:
            raise ValueError("_ConfSpec.default must not be None")


#
# ConfKeys
#
class ConfKeys(StrEnum):
    """Configuration keys for the integration's settings.

    Each key corresponds to a setting that can be configured via options.
    """

    ENDPOINT = "endpoint"


class _Converters:
    """Coercion helpers used by _ConfSpec."""

    @staticmethod
    def to_url(v: Any) -> str:
        """Convert to a whitespace-stripped URL string."""

        return str(v).strip()


# Central registry of settings with defaults and coercion (type conversion).
# This is the single source of truth for all settings keys and their types.
CONF_SPECS: dict[ConfKeys, _ConfSpec[Any]] = {
    ConfKeys.ENDPOINT: _ConfSpec(
        default="",
        converter=_Converters.to_url,
    ),
}

# Public API of this module (keep helper class internal)
__all__ = [
    "ConfKeys",
    "CONF_SPECS",
    "ResolvedConfig",
    "resolve",
    "resolve_entry",
]


#
# ResolvedConfig
#
@dataclass(frozen=True, slots=True)
class ResolvedConfig:
    """Fully resolved configuration with typed fields.

    All values are guaranteed to be non-None and of the correct type.
    """

    endpoint: str


#
# resolve
#
def resolve(options: Mapping[str, Any] | None) -> ResolvedConfig:
    """Resolve settings from options → defaults using ConfKeys.

    Only shallow keys are considered. Performs type coercion via each spec's converter.
    """

    options = options or {}

    def _val(key: ConfKeys) -> Any:
        spec = CONF_SPECS[key]
        if key.value in options and options[key.value] is not None:
            raw = options[key.value]
        else:
            raw = spec.default
        try:
            return spec.converter(raw)
        except Exception:
            # Fallback safely to default if coercion fails
            return spec.converter(spec.default)

    # Build kwargs dynamically by iterating over ConfKeys, applying coercion
    converted: dict[str, Any] = {k.value: _val(k) for k in ConfKeys}

    # Filter strictly to ResolvedConfig fields and fail clearly if anything is missing
    field_names = {f.name for f in fields(ResolvedConfig)}
    missing_for_dc = field_names - converted.keys()
    if missing_for_dc:
        raise RuntimeError(f"Missing values for ResolvedConfig fields: {missing_for_dc}")

    values: dict[str, Any] = {name: converted[name] for name in field_names}
    return ResolvedConfig(**values)


#
# resolve_entry
#
def resolve_entry(entry: Any) -> ResolvedConfig:
    """Resolve settings directly from a ConfigEntry-like object.

    All user settings are stored in options. Accepts any object with 'options'
    attribute (works with test mocks).
    """

    opts = getattr(entry, HA_OPTIONS, None) or {}
    return resolve(opts)
