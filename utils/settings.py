"""Process-wide configuration loaded once at startup."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

SUPPORTED_PROVIDERS = ("openai", "gemini")
TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    vision_provider: str
    openai_api_key: Optional[str]
    openai_model: str
    gemini_api_key: Optional[str]
    gemini_model: str
    strict_item_validation: bool
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment, loading `.env` if present.

        Raises:
            ValueError: If the provider is unknown or its API key is missing.
        """
        load_dotenv()

        provider = os.getenv("VISION_PROVIDER", "openai").strip().lower()
        settings = cls(
            vision_provider=provider,
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_model=os.getenv("OPENAI_MODEL", "gpt-5"),
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            strict_item_validation=os.getenv("STRICT_ITEM_VALIDATION", "false").strip().lower() in TRUTHY,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        match self.vision_provider:
            case "openai":
                if not self.openai_api_key:
                    raise ValueError("OPENAI_API_KEY must be set when VISION_PROVIDER=openai")
            case "gemini":
                if not self.gemini_api_key:
                    raise ValueError("GEMINI_API_KEY must be set when VISION_PROVIDER=gemini")
            case _:
                raise ValueError(
                    f"Unsupported VISION_PROVIDER '{self.vision_provider}'. "
                    f"Supported: {', '.join(SUPPORTED_PROVIDERS)}"
                )
