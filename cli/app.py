from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_alerts, render_health


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the device readings intake service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    secret: Optional[str] = typer.Option(
        None,
        "--secret",
        "-s",
        help="Device shared secret (defaults to DEVICE_SHARED_SECRET env).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the service to answer.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, device_secret=secret, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("evaluate")
def evaluate_command(
    ctx: typer.Context,
    temperature: float = typer.Option(..., "--temperature", "-t", help="Temperature in °C."),
    humidity: float = typer.Option(..., "--humidity", "-H", help="Relative humidity in percent."),
    firmware: str = typer.Option(..., "--firmware", "-f", help="Firmware version of the device."),
) -> None:
    """Send a reading for evaluation and display the alerts it raises."""
    state = _get_state(ctx)
    if state.config.device_secret is None:
        typer.secho(
            "No device secret configured; the service will reject the reading.",
            fg=typer.colors.YELLOW,
            err=True,
        )
    typer.echo(f"Evaluating reading at {state.config.base_url} ...")
    alerts = state.client.evaluate(temperature, humidity, firmware)
    render_alerts(alerts)


@app.command("health")
def health_command(ctx: typer.Context) -> None:
    """Check that the service is up."""
    state = _get_state(ctx)
    render_health(state.client.health())
