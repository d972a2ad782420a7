"""JSON API routes: /health, /api/v1/platform-detection."""


import logging

from babel import Locale
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ...config import get_settings
from ...core.api import CAPABILITIES, supported_platforms
from ...core.canonical.entities import DetectionResponse
from ...core.errors import STATUS_BY_ERROR_CODE
from ...core.orchestrator import SUPPORTED_LANGUAGES, DetectionRequest
from ..helpers.detection import get_detection_service
from ..logging import detection_result_to_loggable
from ..schemas import PlatformDetectionRequest

API_VERSION = "1.0.0"
DETECTION_PATH = "/api/v1/platform-detection"

settings = get_settings()
logger = logging.getLogger("uvicorn.error")
router = APIRouter()


def client_origin(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    if request.client is not None and request.client.host:
        return request.client.host
    return "unknown"


def detection_json_response(response: DetectionResponse) -> JSONResponse:
    body = response.to_dict()
    headers = {"X-Processing-Time": f"{response.processing_info.processing_time}ms"}
    if response.success:
        status_code = 200
        headers["X-Cache"] = "HIT" if response.processing_info.cached else "MISS"
        if response.fast_path:
            headers["X-Fast-Path"] = "TRUE"
        else:
            headers["X-Detection-Confidence"] = str(response.confidence)
    else:
        status_code = STATUS_BY_ERROR_CODE.get(str(response.error_code), 500)
        if response.retry_after is not None:
            headers["Retry-After"] = str(response.retry_after)

    loggable = detection_result_to_loggable(body)
    if loggable is not None:
        logger.debug("Platform detection result: %s", loggable)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _language_name(code: str) -> str:
    return Locale.parse(code).get_display_name("en") or code


@router.get("/health")
def health() -> dict:
    return {"status": "ok", "app": settings.app_name}


@router.post(DETECTION_PATH)
def detect_platform(payload: PlatformDetectionRequest, request: Request) -> JSONResponse:
    detection_request = DetectionRequest(
        headers=list(payload.headers),
        sample_data=[list(row) for row in payload.sample_data],
        language=payload.language,
        user_id=payload.user_id,
        origin=client_origin(request),
    )
    response = get_detection_service().handle(detection_request)
    return detection_json_response(response)


@router.get(DETECTION_PATH)
def detection_info() -> dict:
    platforms = supported_platforms()
    return {
        "success": True,
        "supportedPlatforms": [
            {
                "key": platform.key,
                "label": platform.label,
                "platformSpecificColumns": platform.export_columns,
                "optimizations": platform.optimizations,
            }
            for platform in platforms
        ],
        "totalPlatforms": len(platforms),
        "capabilities": list(CAPABILITIES),
        "supportedLanguages": [
            {"code": code, "name": _language_name(code)} for code in SUPPORTED_LANGUAGES
        ],
        "version": API_VERSION,
    }
