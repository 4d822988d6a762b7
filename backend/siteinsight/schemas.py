"""Pydantic schemas for API request/response (camelCase on the wire)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeRequest(BaseModel):
    url: Any = None


class BulkAnalyzeRequest(BaseModel):
    urls: Any = None


class AnalysisResult(_CamelModel):
    """Everything extracted from one page."""

    url: str
    website_name: str = ""
    category: str
    website_type: str
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    related_phrases: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    fonts: list[str] = Field(default_factory=list)
    font_types: list[str] = Field(default_factory=list)
    desktop: str | None = None
    mobile: str | None = None
    desktop_screenshot: str | None = None
    mobile_screenshot: str | None = None
    warnings: list[str] = Field(default_factory=list)


class BulkItem(_CamelModel):
    url: Any
    success: bool
    data: AnalysisResult | None = None
    error: str | None = None


class BulkAnalyzeResponse(_CamelModel):
    total: int
    success: int
    failed: int
    results: list[BulkItem]


class MessageResponse(BaseModel):
    message: str
