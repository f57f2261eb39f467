from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
import typer

from cli.config import CLIConfig

DEVICE_SECRET_HEADER = "x-device-shared-secret"


class ApiClient:
    """Minimal HTTP client for the readings intake service."""

    def __init__(
        self, config: CLIConfig, transport: Optional[httpx.BaseTransport] = None
    ) -> None:
        self._config = config
        headers = {}
        if config.device_secret is not None:
            headers[DEVICE_SECRET_HEADER] = config.device_secret
        self._client = httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout,
            headers=headers,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def evaluate(self, temperature: float, humidity: float, firmware_version: str) -> Any:
        payload = {
            "temperature": temperature,
            "humidity": humidity,
            "firmwareVersion": firmware_version,
        }
        try:
            response = self._client.post("/readings/evaluate", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    def health(self) -> Dict[str, Any]:
        try:
            response = self._client.get("/health")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        try:
            data = exc.response.json()
        except ValueError:
            data = exc.response.text.strip()
        typer.secho(
            f"Request failed with status {exc.response.status_code}: {describe_error(data)}",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)


def describe_error(data: Any) -> str:
    """Flatten a problem body or field-error map into one line."""
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        parts = []
        for field, messages in data.items():
            if isinstance(messages, list):
                messages = " ".join(str(message) for message in messages)
            parts.append(f"{field}: {messages}")
        if parts:
            return "; ".join(parts)
    if isinstance(data, str) and data:
        return data
    return "no detail provided."
