"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Any, Callable, Sequence, Tuple

from fastapi import APIRouter, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.schemas import AlertResponse
from models.alerts import Alert
from services.intake import (
    DEVICE_SECRET_HEADER,
    ReadingIntakeValidator,
    build_default_intake_validator,
    reading_from_json,
)


def get_intake_validator() -> ReadingIntakeValidator:
    return build_default_intake_validator()


def _encode_result(result: Any) -> Any:
    return jsonable_encoder(
        result,
        custom_encoder={
            Alert: lambda alert: AlertResponse.from_alert(alert).model_dump(
                mode="json", by_alias=True
            )
        },
    )


async def evaluate_readings(
    request: Request,
    intake: ReadingIntakeValidator = Depends(get_intake_validator),
) -> JSONResponse:
    """Evaluate sensor readings from a device and return the alerts they raise."""
    intake.authenticate(request.headers.get(DEVICE_SECRET_HEADER))

    reading = reading_from_json(await request.body())

    result = intake.dispatch(reading)
    return JSONResponse(status_code=status.HTTP_200_OK, content=_encode_result(result))


async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}


Route = Tuple[str, Sequence[str], Callable[..., Any], str]

ROUTES: Sequence[Route] = (
    (
        "/readings/evaluate",
        ("POST",),
        evaluate_readings,
        "Evaluate a device reading and return possible alerts.",
    ),
    ("/health", ("GET",), healthcheck, "Health check endpoint."),
    ("/", ("GET",), root, "Root endpoint mirrors health information."),
)


def build_router(routes: Sequence[Route] = ROUTES) -> APIRouter:
    router = APIRouter()
    for path, methods, endpoint, summary in routes:
        router.add_api_route(path, endpoint, methods=list(methods), summary=summary)
    return router


router = build_router()
