from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FieldResultResponse(BaseModel):
    result: str


class ErrorResponse(BaseModel):
    error: str


class MetadataResponse(BaseModel):
    """Documented shape of /optimize; extra model fields are passed through."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    language: Optional[str] = None
    alt_text: Optional[str] = Field(None, alias="alt-text")
    caption: Optional[str] = None
    description: Optional[str] = None
    filename: Optional[str] = None
    focus_keyword: Optional[str] = Field(None, alias="focus-keyword")
    tags: Optional[List[str]] = None
