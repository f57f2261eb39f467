"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from models.alerts import Alert, AlertType


class DeviceReadingRequest(BaseModel):
    """Sensor readings and metadata posted by a device."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, allow_inf_nan=False)

    temperature: float = Field(..., strict=True, description="Temperature in degrees Celsius.")
    humidity: float = Field(..., strict=True, description="Relative humidity in percent.")
    firmware_version: str = Field(
        ...,
        alias="firmwareVersion",
        description="Firmware version reported by the device.",
    )


class AlertResponse(BaseModel):
    """Alert as serialized back to the device."""

    model_config = ConfigDict(populate_by_name=True)

    alert_type: AlertType = Field(..., alias="alertType")
    message: str

    @classmethod
    def from_alert(cls, alert: Alert) -> "AlertResponse":
        return cls(alert_type=alert.alert_type, message=alert.message)

