"""Controller for health-checkup image analysis requests."""

from typing import Optional

from fastapi import Request, UploadFile
from fastapi.responses import JSONResponse

from services.analysis.analyzer import HealthCheckupAnalyzer
from services.analysis.errors import AnalysisError
from utils.media_validation import first_image_upload, read_uploaded_image

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def error_response(error: AnalysisError) -> JSONResponse:
    """Render a classified failure as the JSON body the upload client expects."""
    return JSONResponse(error.to_payload(), status_code=error.status_code, headers=CORS_HEADERS)


async def analyze_image(request: Request, image_file: Optional[UploadFile]) -> JSONResponse:
    """Read the upload, run the analyzer, and map the outcome to a response.

    Args:
        request: FastAPI Request (used to access the shared provider and settings).
        image_file: The multipart `image` field bound by the route. When a form
            repeats the field the first part is used instead.

    Returns:
        200 with the extracted object, or the classified error's status and body.
    """
    provider = request.app.state.vision_provider
    settings = getattr(request.app.state, "settings", None)
    strict_items = bool(settings and settings.strict_item_validation)

    analyzer = HealthCheckupAnalyzer(provider, strict_items=strict_items)
    if image_file is not None:
        image_file = await first_image_upload(request)
    image = await read_uploaded_image(image_file)

    try:
        result = await analyzer.analyze(image)
    except AnalysisError as exc:
        return error_response(exc)

    return JSONResponse(result.to_dict(), status_code=200, headers=CORS_HEADERS)
