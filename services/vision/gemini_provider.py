"""GeminiVisionProvider: Google Gemini vision backend via google-genai."""

import logging
from typing import Optional

from google import genai
from google.genai import types

from services.vision.client import VisionProvider

LOGGER = logging.getLogger(__name__)
DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiVisionProvider(VisionProvider):
    """Vision provider backed by a shared `genai.Client`."""

    name = "gemini"

    def __init__(self, client: Optional[genai.Client] = None, *, api_key: Optional[str] = None, model: str = DEFAULT_MODEL) -> None:
        if client is None and not api_key:
            raise ValueError("Gemini client or API key must be provided.")
        self.client = client or genai.Client(api_key=api_key)
        self.model = model

    async def infer(self, image_bytes: bytes, mime_type: str, instruction: str) -> str:
        """Send the inline image and instruction in one generate_content call."""
        image_part = types.Part.from_bytes(data=image_bytes, mime_type=mime_type)
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=[image_part, instruction],
            )
        except Exception as exc:
            LOGGER.error("Error during Gemini generate_content call: %s", exc)
            raise
        return getattr(response, "text", "") or ""

    async def aclose(self) -> None:
        """Close the async transport behind `client.aio`."""
        await self.client.aio.aclose()
