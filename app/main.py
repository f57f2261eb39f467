from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api import get_intake_validator, router
from logging_config import configure_logging
from services.intake import (
    DeviceAuthenticationError,
    ReadingIntakeValidator,
    ReadingValidationError,
)


async def _authentication_error_handler(
    _request: Request, exc: DeviceAuthenticationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": exc.detail},
    )


async def _validation_error_handler(
    _request: Request, exc: ReadingValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=exc.errors,
    )


def create_app(intake: Optional[ReadingIntakeValidator] = None) -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Device Readings Intake",
        description="Authenticates device sensor readings and evaluates the alerts they raise.",
        version="0.1.0",
    )
    app.include_router(router)
    app.add_exception_handler(DeviceAuthenticationError, _authentication_error_handler)
    app.add_exception_handler(ReadingValidationError, _validation_error_handler)
    if intake is not None:
        app.dependency_overrides[get_intake_validator] = lambda: intake
    return app

app = create_app()
