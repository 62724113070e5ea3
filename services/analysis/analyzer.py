"""Health-checkup extraction pipeline: image in, validated AnalysisResult out."""

import logging
import time
from typing import Optional

from models.analysis_result import AnalysisResult, ExtractionRequest, UploadedImage
from services.analysis.errors import (
    AnalysisError,
    MissingInputError,
    UnparsableReplyError,
    UpstreamFailureError,
)
from services.analysis.prompts import build_extraction_prompt
from services.analysis.response_parser import parse_reply, validate_result_shape
from services.vision.client import VisionProvider

LOGGER = logging.getLogger(__name__)
REPLY_PREVIEW_CHARS = 200


class HealthCheckupAnalyzer:
    """Extract the measurement date and test items from a checkup photo."""

    def __init__(self, provider: VisionProvider, *, strict_items: bool = False) -> None:
        """Initialize the analyzer with a shared, read-only vision provider."""
        if provider is None:
            raise ValueError("Vision provider must be provided.")
        self.provider = provider
        self.strict_items = strict_items
        self.instruction = build_extraction_prompt()

    def build_request(self, image: UploadedImage) -> ExtractionRequest:
        """Pair the image with the fixed extraction instruction."""
        return ExtractionRequest(image=image, instruction=self.instruction)

    async def analyze(self, image: Optional[UploadedImage]) -> AnalysisResult:
        """Run one extraction end to end.

        Args:
            image: Uploaded image, or None when the request carried no file.

        Returns:
            The validated result, holding the provider's object unchanged.

        Raises:
            MissingInputError: If no image payload is present. No provider call is made.
            UpstreamFailureError: If the provider call fails for any reason.
            UnparsableReplyError: If the reply contains no JSON-shaped substring.
            ReplyDecodeError: If that substring is not valid JSON.
            InvalidResultShapeError: If `date` or `items` are unusable.
        """
        if image is None or not image.content:
            raise MissingInputError()

        LOGGER.info(
            "Analyzing %s (%s, %d bytes)",
            image.filename or "uploaded image",
            image.mime_type or "unknown type",
            len(image.content),
        )
        request = self.build_request(image)
        reply = await self._request_reply(request)

        try:
            parsed = parse_reply(reply)
            validate_result_shape(parsed, strict_items=self.strict_items)
        except UnparsableReplyError:
            LOGGER.error("No JSON object found in provider reply: %.*s", REPLY_PREVIEW_CHARS, reply)
            raise
        except AnalysisError as exc:
            LOGGER.error("Rejected provider reply (%s): %s", exc.kind, exc)
            raise

        result = AnalysisResult.from_payload(parsed)
        LOGGER.info("Extracted %d item(s) dated %s", len(result.items), result.date)
        return result

    async def _request_reply(self, request: ExtractionRequest) -> str:
        """Call the provider once and return its raw text reply."""
        start_time = time.time()
        try:
            reply = await self.provider.infer(
                request.image.content, request.mime_type, request.instruction
            )
        except Exception as exc:
            LOGGER.error("Vision provider '%s' failed: %s", self.provider.name, exc)
            raise UpstreamFailureError(str(exc)) from exc
        LOGGER.info(
            "Provider '%s' replied with %d characters in %.2fs",
            self.provider.name,
            len(reply),
            time.time() - start_time,
        )
        return reply
