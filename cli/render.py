from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_alerts(alerts: Any) -> None:
    echo_heading("Alerts")
    if not alerts:
        typer.secho("No alerts raised.", fg=typer.colors.GREEN)
        return
    if not isinstance(alerts, list):
        typer.echo(alerts)
        return
    for alert in alerts:
        if isinstance(alert, dict):
            typer.secho(
                f"  - {alert.get('alertType')}: {alert.get('message')}",
                fg=typer.colors.YELLOW,
            )
        else:
            typer.echo(f"  - {alert}")


def render_health(payload: Dict[str, Any]) -> None:
    echo_heading("Service Health")
    echo_key_values((key, value) for key, value in payload.items() if value is not None)
