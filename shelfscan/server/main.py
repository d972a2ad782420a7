"""FastAPI server adapter for the Shelfscan core engine."""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Load .env before importing modules that may resolve/capture settings.
ROOT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(ROOT_DIR / ".env")

from ..config import get_settings
from ..core.canonical.entities import DetectionResponse
from ..core.errors import DetectionValidationError
from .routers import api
from .routers.api import DETECTION_PATH, detection_json_response

settings = get_settings()
logger = logging.getLogger("uvicorn.error")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Request body is not valid JSON"
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg") or "Invalid value")
    return f"Invalid request: {location}: {message}" if location else f"Invalid request: {message}"


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    if request.url.path != DETECTION_PATH:
        return await request_validation_exception_handler(request, exc)
    logger.info("Rejected platform detection request: %s", exc.errors())
    response = DetectionResponse.failure(
        error=_validation_message(exc),
        error_code=DetectionValidationError.error_code,
    )
    return detection_json_response(response)


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        summary="Detect the source platform of product spreadsheets and plan enhanced exports",
        version=api.API_VERSION,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Cache", "X-Processing-Time", "X-Fast-Path", "X-Detection-Confidence", "Retry-After"],
    )

    fastapi_app.add_exception_handler(RequestValidationError, _validation_error_handler)
    fastapi_app.include_router(api.router)
    return fastapi_app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("shelfscan.server.main:app", host="0.0.0.0", port=8000, reload=settings.debug)


__all__ = ["app", "create_app", "logger", "run", "settings"]
