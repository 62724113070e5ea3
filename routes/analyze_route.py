"""FastAPI routes for health-checkup image analysis."""

import logging
from typing import Optional

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import JSONResponse, Response

from controllers.analyze_controller import (
    PREFLIGHT_HEADERS,
    analyze_image,
    error_response,
)
from models.analysis_schemas import AnalysisResponse, ErrorResponse
from services.analysis.errors import AnalysisError

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analyze"])


@router.options("/analyze", include_in_schema=False)
async def analyze_preflight() -> Response:
    """Answer cross-origin preflight requests for the analysis endpoint."""
    return Response(status_code=200, headers=PREFLIGHT_HEADERS)


@router.post(
    "/analyze",
    summary="Extract the measurement date and test items from a checkup photo",
    response_model=AnalysisResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def post_analyze(request: Request, image: Optional[UploadFile] = File(None)) -> JSONResponse:
    """Handle an image upload and return the extracted checkup data."""
    try:
        return await analyze_image(request, image)
    except Exception as exc:
        LOGGER.exception("Error analyzing image")
        return error_response(AnalysisError(str(exc) or "Unknown error occurred"))

