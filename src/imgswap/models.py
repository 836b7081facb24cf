from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from .gate import RequestContext


class ClassifyRequest(BaseModel):
    urls: List[str] = Field(default_factory=list)
    html: Optional[str] = None
    context: Optional[RequestContext] = None

    @model_validator(mode="after")
    def validate_input(self) -> "ClassifyRequest":
        if not self.urls and not self.html:
            raise ValueError("classify requires urls or html")
        return self


class UrlDecision(BaseModel):
    url: str
    eligible: bool
    normalized_url: str
    width: Union[int, bool] = False
    height: Union[int, bool] = False
    crop: Union[bool, List[str]] = False


class ClassifyResponse(BaseModel):
    replaced: bool
    is_foreign_allowed: bool
    decisions: List[UrlDecision]


class SourcesResponse(BaseModel):
    possible_sources: List[str]
    allowed_sources: List[str]
    is_foreign_allowed: bool
    site_mappings: dict[str, str] = Field(default_factory=dict)
