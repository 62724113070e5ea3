"""Construct the configured vision provider."""

from services.vision.client import VisionProvider
from services.vision.gemini_provider import GeminiVisionProvider
from services.vision.openai_provider import OpenAIVisionProvider
from utils.settings import Settings


def build_provider(settings: Settings) -> VisionProvider:
    """Return the provider selected by `settings.vision_provider`."""
    if settings.vision_provider == "gemini":
        return GeminiVisionProvider(api_key=settings.gemini_api_key, model=settings.gemini_model)
    if settings.vision_provider == "openai":
        return OpenAIVisionProvider(api_key=settings.openai_api_key, model=settings.openai_model)
    raise ValueError(f"Unsupported vision provider '{settings.vision_provider}'.")
