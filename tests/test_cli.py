from __future__ import annotations

import json
from typing import Any, List

import httpx
import pytest
import typer
from typer.testing import CliRunner

from cli.app import app
from cli.client import ApiClient, describe_error
from cli.config import load_config


class StubClient:
    def __init__(self, config, alerts: Any = None) -> None:
        self.config = config
        self.alerts = alerts if alerts is not None else [
            {"alertType": "DangerousTemperature", "message": "Temperature reached 46°C."},
        ]
        self.evaluate_calls: List[tuple[float, float, str]] = []
        self.closed = False

    def evaluate(self, temperature: float, humidity: float, firmware_version: str) -> Any:
        self.evaluate_calls.append((temperature, humidity, firmware_version))
        return self.alerts

    def health(self) -> dict:
        return {"status": "ok", "detail": None}

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _install_stub(monkeypatch, stub: StubClient) -> None:
    def factory(config):
        stub.config = config
        return stub

    monkeypatch.setattr("cli.app.ApiClient", factory)


def test_evaluate_renders_alerts(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(
        app,
        ["--secret", "abc", "evaluate", "-t", "46", "-H", "40", "-f", "1.2.3"],
    )

    assert result.exit_code == 0
    assert "Alerts" in result.stdout
    assert "DangerousTemperature: Temperature reached 46°C." in result.stdout
    assert stub.evaluate_calls == [(46.0, 40.0, "1.2.3")]
    assert stub.config.device_secret == "abc"
    assert stub.closed is True


def test_evaluate_without_alerts(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None, alerts=[])
    _install_stub(monkeypatch, stub)

    result = runner.invoke(
        app,
        ["-s", "abc", "evaluate", "--temperature", "20", "--humidity", "40", "--firmware", "1.0.0"],
    )

    assert result.exit_code == 0
    assert "No alerts raised." in result.stdout


def test_health_command(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["--base-url", "http://sensors.local:9000/", "health"])

    assert result.exit_code == 0
    assert "status: ok" in result.stdout
    assert "detail" not in result.stdout
    assert stub.config.base_url == "http://sensors.local:9000"


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://gateway:8080/")
    monkeypatch.setenv("DEVICE_SHARED_SECRET", "from-env")
    monkeypatch.setenv("CLI_REQUEST_TIMEOUT", "not-a-number")

    config = load_config()

    assert config.base_url == "http://gateway:8080"
    assert config.device_secret == "from-env"
    assert config.timeout == 30.0


def test_describe_error_handles_problem_and_field_maps() -> None:
    assert describe_error({"detail": "Device secret is not within the valid range."}) == (
        "Device secret is not within the valid range."
    )
    assert describe_error({"FirmwareVersion": ["bad format."]}) == "FirmwareVersion: bad format."
    assert describe_error("") == "no detail provided."


def test_api_client_exits_on_rejected_reading(capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers.get("x-device-shared-secret") == "nope"
        return httpx.Response(401, json={"detail": "Device secret is not within the valid range."})

    client = ApiClient(
        load_config(base_url="http://testserver", device_secret="nope"),
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(typer.Exit) as excinfo:
        client.evaluate(20.0, 40.0, "1.0.0")
    client.close()

    assert excinfo.value.exit_code == 1
    assert "status 401" in capsys.readouterr().err


def test_api_client_posts_camel_case_payload() -> None:
    seen: List[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json=[])

    client = ApiClient(
        load_config(base_url="http://testserver", device_secret="s"),
        transport=httpx.MockTransport(handler),
    )

    assert client.evaluate(21.0, 40.0, "1.0.0") == []
    client.close()
    assert seen == [{"temperature": 21.0, "humidity": 40.0, "firmwareVersion": "1.0.0"}]
