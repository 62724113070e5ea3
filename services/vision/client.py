"""VisionProvider: abstract base for multimodal inference backends."""

import inspect
from abc import ABC, abstractmethod
from typing import Any


class VisionProvider(ABC):
    """Send one image plus an instruction to a model and return its text reply."""

    name = "abstract"
    client: Any = None

    @abstractmethod
    async def infer(self, image_bytes: bytes, mime_type: str, instruction: str) -> str:
        """Return the provider's raw text reply. Raises on any upstream failure."""
        ...

    async def aclose(self) -> None:
        """Close the underlying SDK client if it exposes a close/aclose method."""
        if self.client is None:
            return
        closer = getattr(self.client, "aclose", None) or getattr(self.client, "close", None)
        if closer is None:
            return
        result = closer()
        if inspect.isawaitable(result):
            await result
