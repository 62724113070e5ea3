"""Pydantic models describing the analysis endpoint's wire shapes."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class AnalysisItem(BaseModel):
    """One extracted test item. Values stay opaque strings."""

    model_config = ConfigDict(strict=True, extra="allow")

    name: str
    value: str
    unit: str


class AnalysisResponse(BaseModel):
    date: str
    items: List[AnalysisItem] = []


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
    raw: Optional[str] = None
