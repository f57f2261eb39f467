"""Alert evaluation for device sensor readings."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, List, Optional, Protocol

from app.schemas import DeviceReadingRequest
from models.alerts import Alert, AlertThresholds, AlertType
from settings import get_settings


class AlertEvaluator(Protocol):
    def get_alerts(self, reading: DeviceReadingRequest) -> Any: ...


class AlertService:
    """Pure alert rules that can be unit tested in isolation."""

    def __init__(self, thresholds: Optional[AlertThresholds] = None) -> None:
        self.thresholds = thresholds or AlertThresholds()

    def get_alerts(self, reading: DeviceReadingRequest) -> List[Alert]:
        limits = self.thresholds
        alerts: List[Alert] = []

        humidity_in_range = limits.humidity_min <= reading.humidity <= limits.humidity_max
        temperature_in_range = (
            limits.temperature_min <= reading.temperature <= limits.temperature_max
        )

        if not humidity_in_range:
            alerts.append(
                Alert(
                    alert_type=AlertType.HumiditySensorOutOfRange,
                    message="Humidity sensor is out of range.",
                )
            )
        if not temperature_in_range:
            alerts.append(
                Alert(
                    alert_type=AlertType.TemperatureSensorOutOfRange,
                    message="Temperature sensor is out of range.",
                )
            )
        if temperature_in_range and reading.temperature >= limits.dangerous_temperature:
            alerts.append(
                Alert(
                    alert_type=AlertType.DangerousTemperature,
                    message=f"Temperature reached {reading.temperature:g}°C.",
                )
            )
        if humidity_in_range and reading.humidity >= limits.dangerous_humidity:
            alerts.append(
                Alert(
                    alert_type=AlertType.DangerousHumidity,
                    message=f"Humidity reached {reading.humidity:g}%.",
                )
            )

        return alerts


@lru_cache
def build_default_alert_service() -> AlertService:
    """Factory that wires the alert rules with configured thresholds."""
    settings = get_settings()
    thresholds = AlertThresholds(
        temperature_min=settings.temperature_min,
        temperature_max=settings.temperature_max,
        humidity_min=settings.humidity_min,
        humidity_max=settings.humidity_max,
        dangerous_temperature=settings.dangerous_temperature,
        dangerous_humidity=settings.dangerous_humidity,
    )
    return AlertService(thresholds=thresholds)
