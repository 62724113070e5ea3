from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_MIME_TYPE = "image/jpeg"


@dataclass(frozen=True)
class UploadedImage:
    """An image received from the upload client for a single request.

    Attributes:
        content: Raw image bytes as uploaded.
        mime_type: Declared media type (may be empty when the client sent none).
        filename: Optional original filename, used for logging only.
    """

    content: bytes
    mime_type: str = ""
    filename: Optional[str] = None


@dataclass(frozen=True)
class ExtractionRequest:
    """The image plus the fixed extraction instruction sent to the provider."""

    image: UploadedImage
    instruction: str

    @property
    def mime_type(self) -> str:
        return self.image.mime_type or DEFAULT_MIME_TYPE


@dataclass(frozen=True)
class AnalysisResult:
    """Validated extraction output.

    `payload` is the provider's parsed object exactly as returned; `date` and
    `items` are views onto it and are never normalized.
    """

    date: str
    items: List[Any]
    payload: Dict[str, Any] = field(repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AnalysisResult":
        return cls(date=payload["date"], items=payload["items"], payload=payload)

    def to_dict(self) -> Dict[str, Any]:
        return self.payload
