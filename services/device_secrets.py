"""Shared-secret validation for devices."""

from __future__ import annotations

import hmac
from functools import lru_cache
from typing import Iterable, Optional, Protocol, Tuple

from settings import get_settings


class SecretValidator(Protocol):
    def validate_device_secret(self, secret: Optional[str]) -> bool: ...


class DeviceSecretValidator:
    """Accepts only secrets from a fixed, configured set."""

    def __init__(self, valid_secrets: Iterable[str]) -> None:
        self._valid_secrets: Tuple[bytes, ...] = tuple(
            secret.encode("utf-8", errors="surrogatepass")
            for secret in dict.fromkeys(valid_secrets)
            if secret
        )

    def validate_device_secret(self, secret: Optional[str]) -> bool:
        if not secret:
            return False
        candidate = secret.encode("utf-8", errors="surrogatepass")
        # Every configured secret is compared, in constant time per secret.
        matches = [hmac.compare_digest(candidate, valid) for valid in self._valid_secrets]
        return any(matches)


@lru_cache
def build_default_secret_validator() -> DeviceSecretValidator:
    return DeviceSecretValidator(get_settings().device_secrets)
