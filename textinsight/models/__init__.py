"""数据模型"""
from textinsight.models.analysis import (
    AnalysisResult,
    AnalyzeRequest,
    ApplyRequest,
    ApplyResponse,
    ClassifyRequest,
    GroupedMatches,
    ReadabilityReport,
    ReadabilityRequest,
    TextStats,
)
from textinsight.models.match import (
    CheckedLanguage,
    DetectedLanguage,
    GrammarCheckResult,
    Match,
    MatchContext,
    build_match_key,
)

__all__ = [
    "AnalysisResult",
    "AnalyzeRequest",
    "ApplyRequest",
    "ApplyResponse",
    "CheckedLanguage",
    "ClassifyRequest",
    "DetectedLanguage",
    "GrammarCheckResult",
    "GroupedMatches",
    "Match",
    "MatchContext",
    "ReadabilityReport",
    "ReadabilityRequest",
    "TextStats",
    "build_match_key",
]
