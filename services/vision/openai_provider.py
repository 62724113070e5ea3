"""OpenAIVisionProvider: OpenAI Responses API vision backend."""

import logging
from typing import Optional

from openai import AsyncOpenAI

from services.vision.client import VisionProvider
from services.vision.media_inputs import build_inputs, to_image_data_url

LOGGER = logging.getLogger(__name__)
DEFAULT_MODEL = "gpt-5"


class OpenAIVisionProvider(VisionProvider):
    """Vision provider backed by a shared `AsyncOpenAI` client."""

    name = "openai"

    def __init__(self, client: Optional[AsyncOpenAI] = None, *, api_key: Optional[str] = None, model: str = DEFAULT_MODEL) -> None:
        """Initialize the provider.

        Args:
            client: Optional preconfigured async client for dependency injection.
            api_key: API key used to build a client when none is given.
            model: Model name passed to the Responses API.
        """
        if client is None and not api_key:
            raise ValueError("OpenAI client or API key must be provided.")
        self.client = client or AsyncOpenAI(api_key=api_key)
        self.model = model

    async def infer(self, image_bytes: bytes, mime_type: str, instruction: str) -> str:
        """Send the image and instruction to the Responses API and return its text."""
        image_url = to_image_data_url(image_bytes, mime_type)
        try:
            response = await self.client.responses.create(
                model=self.model,
                input=build_inputs(instruction, image_url),
            )
        except Exception as exc:
            LOGGER.error("Error during OpenAI Responses API call: %s", exc)
            raise
        return getattr(response, "output_text", "") or ""
