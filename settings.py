from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple


_DEVICE_SECRETS_ENV = "DEVICE_SHARED_SECRETS"
_TEMPERATURE_MIN_ENV = "TEMPERATURE_SENSOR_MIN"
_TEMPERATURE_MAX_ENV = "TEMPERATURE_SENSOR_MAX"
_HUMIDITY_MIN_ENV = "HUMIDITY_SENSOR_MIN"
_HUMIDITY_MAX_ENV = "HUMIDITY_SENSOR_MAX"
_DANGEROUS_TEMPERATURE_ENV = "DANGEROUS_TEMPERATURE"
_DANGEROUS_HUMIDITY_ENV = "DANGEROUS_HUMIDITY"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    device_secrets: Tuple[str, ...]
    temperature_min: float
    temperature_max: float
    humidity_min: float
    humidity_max: float
    dangerous_temperature: float
    dangerous_humidity: float
    log_level: str


def _read_secrets(name: str) -> Tuple[str, ...]:
    value = os.getenv(name)
    if value is None:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _read_float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        return float(candidate)
    except ValueError:
        return default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        device_secrets=_read_secrets(_DEVICE_SECRETS_ENV),
        temperature_min=_read_float_env(_TEMPERATURE_MIN_ENV, -40.0),
        temperature_max=_read_float_env(_TEMPERATURE_MAX_ENV, 85.0),
        humidity_min=_read_float_env(_HUMIDITY_MIN_ENV, 0.0),
        humidity_max=_read_float_env(_HUMIDITY_MAX_ENV, 100.0),
        dangerous_temperature=_read_float_env(_DANGEROUS_TEMPERATURE_ENV, 45.0),
        dangerous_humidity=_read_float_env(_DANGEROUS_HUMIDITY_ENV, 90.0),
        log_level=_read_log_level("INFO"),
    )
