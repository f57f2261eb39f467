"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AlertType(str, Enum):
    """Kinds of alerts a device reading can raise."""

    HumiditySensorOutOfRange = "HumiditySensorOutOfRange"
    TemperatureSensorOutOfRange = "TemperatureSensorOutOfRange"
    DangerousTemperature = "DangerousTemperature"
    DangerousHumidity = "DangerousHumidity"


@dataclass(slots=True)
class Alert:
    """A single alert raised by a reading."""

    alert_type: AlertType
    message: str


@dataclass(frozen=True)
class AlertThresholds:
    """Sensor ranges and the danger levels inside them."""

    temperature_min: float = -40.0
    temperature_max: float = 85.0
    humidity_min: float = 0.0
    humidity_max: float = 100.0
    dangerous_temperature: float = 45.0
    dangerous_humidity: float = 90.0
