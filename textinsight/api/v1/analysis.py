"""Analysis APIs: analyse content, apply a replacement, regroup matches."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from textinsight.api.deps import get_analysis_service, match_body
from textinsight.core.errors import InvalidInputError
from textinsight.core.logging import LogEvent, get_logger
from textinsight.models.analysis import (
    AnalysisResult,
    AnalyzeRequest,
    ApplyRequest,
    ApplyResponse,
    ClassifyRequest,
    GroupedMatches,
    ReadabilityRequest,
    TextStats,
)
from textinsight.services.analysis_service import AnalysisService
from textinsight.services.match_classifier import classify_matches
from textinsight.services.readability import compute_text_stats
from textinsight.services.replacement import apply_replacement, record_fix

logger = get_logger(__name__)
router = APIRouter(prefix="/api/v1", tags=["Analysis"])


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    response_model_exclude_none=True,
    summary="Analyse content",
)
async def analyze(
    payload: AnalyzeRequest,
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisResult:
    return await service.analyze(payload.content, payload.language)


@router.post("/apply", response_model=ApplyResponse, summary="Apply a replacement to the content")
async def apply(payload: ApplyRequest = Depends(match_body(ApplyRequest))) -> ApplyResponse:
    if payload.match.replacements and payload.replacement not in payload.match.replacements:
        raise InvalidInputError(
            "Replacement is not one of the suggested values",
            field="replacement",
            value=payload.replacement,
        )
    result = apply_replacement(payload.content, payload.match, payload.replacement)
    fixed = record_fix(payload.fixed, payload.match, payload.replacement)
    logger.info(
        LogEvent.REPLACEMENT_APPLIED,
        key=payload.match.key,
        delta=result.delta,
        fixed=len(fixed),
    )
    return ApplyResponse(
        new_content=result.content,
        message="Replacement applied",
        key=payload.match.key,
        delta=result.delta,
        fixed=fixed,
    )


@router.post("/classify", response_model=GroupedMatches, summary="Group matches into corrections and suggestions")
async def classify(payload: ClassifyRequest = Depends(match_body(ClassifyRequest))) -> GroupedMatches:
    return classify_matches(payload.matches, payload.fixed).to_model()


@router.post("/readability", response_model=TextStats, summary="Word, character and readability stats")
async def readability(payload: ReadabilityRequest) -> TextStats:
    return compute_text_stats(payload.content)
