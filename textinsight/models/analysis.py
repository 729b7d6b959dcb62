"""
分析请求/响应模型 - HTTP boundary schemas
"""
from __future__ import annotations

from typing import Annotated, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from textinsight.models.match import CheckedLanguage, Match


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("content must not be empty")
    return value


NonEmptyText = Annotated[str, AfterValidator(_require_text)]


class ReadabilityReport(BaseModel):
    """Flesch Reading Ease score with the counts it was computed from."""
    score: float
    label: Optional[str] = None
    sentence_count: int = 0
    word_count: int = 0
    syllable_count: int = 0


class TextStats(BaseModel):
    word_count: int
    character_count: int
    readability: ReadabilityReport


class GroupedMatches(BaseModel):
    """Matches partitioned into one-click corrections and other suggestions, keyed by sentence."""
    corrections: Dict[str, List[Match]] = Field(default_factory=dict)
    suggestions: Dict[str, List[Match]] = Field(default_factory=dict)


class AnalyzeRequest(BaseModel):
    content: NonEmptyText = Field(..., description="Text to analyse")
    language: Optional[str] = Field(default=None, description="Language code; unsupported codes fall back to the default")


class AnalysisResult(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    embedding: Optional[List[float]] = None
    corrections: Optional[List[Match]] = None
    language: Optional[CheckedLanguage] = None
    stats: Optional[TextStats] = None
    groups: Optional[GroupedMatches] = None
    errors: Optional[Dict[str, str]] = None


class ApplyRequest(BaseModel):
    match: Match
    replacement: str
    content: NonEmptyText
    fixed: Dict[str, str] = Field(default_factory=dict)


class ApplyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_content: str = Field(..., alias="newContent")
    message: str
    key: str
    delta: int
    fixed: Dict[str, str]


class ClassifyRequest(BaseModel):
    matches: List[Match] = Field(default_factory=list)
    fixed: Dict[str, str] = Field(default_factory=dict)


class ReadabilityRequest(BaseModel):
    content: NonEmptyText
