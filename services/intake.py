"""Validation and dispatch of device readings."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from app.schemas import DeviceReadingRequest
from models.alerts import Alert
from services.alerts import AlertEvaluator, build_default_alert_service
from services.device_secrets import SecretValidator, build_default_secret_validator
from services.firmware import is_semantic_version

logger = logging.getLogger(__name__)

DEVICE_SECRET_HEADER = "x-device-shared-secret"
INVALID_SECRET_DETAIL = "Device secret is not within the valid range."
INVALID_FIRMWARE_MESSAGE = "The firmware value does not match semantic versioning format."
INVALID_JSON_MESSAGE = "The request body is not valid JSON."

_LOGGED_FIRMWARE_LENGTH = 64


class IntakeError(Exception):
    """Base class for readings rejected before alert evaluation."""


class DeviceAuthenticationError(IntakeError):
    def __init__(self, detail: str = INVALID_SECRET_DETAIL) -> None:
        super().__init__(detail)
        self.detail = detail


class ReadingValidationError(IntakeError):
    """Field-level problems, keyed by PascalCase field name."""

    def __init__(self, errors: Mapping[str, List[str]]) -> None:
        super().__init__("; ".join(f"{key}: {', '.join(msgs)}" for key, msgs in errors.items()))
        self.errors: Dict[str, List[str]] = {key: list(msgs) for key, msgs in errors.items()}


class FirmwareVersionError(ReadingValidationError):
    def __init__(self) -> None:
        super().__init__({"FirmwareVersion": [INVALID_FIRMWARE_MESSAGE]})


def _pascal_case(name: str) -> str:
    return name[:1].upper() + name[1:]


def _loggable(value: str) -> str:
    """Quote device-supplied text so it cannot break a log line."""
    return repr(value[:_LOGGED_FIRMWARE_LENGTH])


def _field_errors(exc: ValidationError) -> ReadingValidationError:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        key = _pascal_case(location[0]) if location else "Body"
        if error.get("type") == "json_invalid":
            message = INVALID_JSON_MESSAGE
        else:
            message = error.get("msg", "Invalid value.")
        errors.setdefault(key, []).append(message)
    return ReadingValidationError(errors)


def reading_from_json(raw_body: Union[bytes, str]) -> DeviceReadingRequest:
    """Parse and validate a raw JSON body in one pass."""
    try:
        return DeviceReadingRequest.model_validate_json(raw_body)
    except ValidationError as exc:
        raise _field_errors(exc) from exc


class ReadingIntakeValidator:
    """Authenticates a device, checks its firmware string and asks for alerts.

    The secret check always runs first; a request failing both checks is
    reported as an authentication failure.
    """

    def __init__(
        self,
        secret_validator: SecretValidator,
        alert_evaluator: AlertEvaluator,
    ) -> None:
        self.secret_validator = secret_validator
        self.alert_evaluator = alert_evaluator

    def authenticate(self, secret: Optional[str]) -> None:
        if secret is None or not self.secret_validator.validate_device_secret(secret):
            reason = "missing_secret" if secret is None else "invalid_secret"
            logger.info("Rejected device reading", extra={"reason": reason, "status": 401})
            raise DeviceAuthenticationError()

    def check_firmware(self, reading: DeviceReadingRequest) -> None:
        if not is_semantic_version(reading.firmware_version):
            # TODO: old devices request a firmware update after this error; no
            # trigger exists yet because the update service contract is undefined.
            logger.info(
                "Rejected device reading",
                extra={
                    "reason": "invalid_firmware",
                    "status": 400,
                    "firmware_version": _loggable(reading.firmware_version),
                },
            )
            raise FirmwareVersionError()

    def evaluate(self, secret: Optional[str], reading: DeviceReadingRequest) -> Any:
        """Run both checks in order, then return the evaluator's result untouched."""
        self.authenticate(secret)
        return self.dispatch(reading)

    def dispatch(self, reading: DeviceReadingRequest) -> Any:
        """Check the firmware of an already authenticated reading and get its alerts."""
        self.check_firmware(reading)

        result = self.alert_evaluator.get_alerts(reading)
        alert_count = alert_types = None
        if isinstance(result, (list, tuple)):
            alert_count = len(result)
            alert_types = [item.alert_type.value for item in result if isinstance(item, Alert)]
        logger.info(
            "Evaluated device reading",
            extra={
                "status": 200,
                "firmware_version": _loggable(reading.firmware_version),
                "alert_count": alert_count,
                "alert_types": alert_types,
            },
        )
        return result


@lru_cache
def build_default_intake_validator() -> ReadingIntakeValidator:
    """Factory that wires the intake validator with configured collaborators."""
    return ReadingIntakeValidator(
        secret_validator=build_default_secret_validator(),
        alert_evaluator=build_default_alert_service(),
    )
