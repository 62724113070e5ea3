"""Failure kinds raised by the analysis pipeline.

Each error knows the HTTP status and JSON body it maps to, so the controller
can turn any of them into a response without inspecting the type.
"""

from typing import Any, Dict, Optional


class AnalysisError(Exception):
    """Base class for every classified analysis failure."""

    kind = "AnalysisFailure"
    status_code = 500
    message = "Failed to analyze image"

    def __init__(self, details: Optional[str] = None) -> None:
        super().__init__(details or self.message)
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class MissingInputError(AnalysisError):
    """No image payload was attached to the request."""

    kind = "MissingInput"
    status_code = 400
    message = "No image file provided"


class UpstreamFailureError(AnalysisError):
    """The call to the inference provider failed."""

    kind = "UpstreamFailure"


class ReplyDecodeError(AnalysisError):
    """A JSON-shaped substring was found but is not valid JSON."""

    kind = "ReplyDecodeFailure"


class UnparsableReplyError(AnalysisError):
    """The provider reply contains no JSON-shaped substring."""

    kind = "UnparsableReply"
    message = "Failed to extract JSON from response"

    def __init__(self, raw: str) -> None:
        super().__init__()
        self.raw = raw

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, "raw": self.raw}


class InvalidResultShapeError(AnalysisError):
    """Parsed JSON lacks a usable `date` or `items`."""

    kind = "InvalidResultShape"
    message = "Invalid response format from AI"

    def __init__(self, reason: str) -> None:
        super().__init__()
        self.reason = reason

    def __str__(self) -> str:
        return self.reason
