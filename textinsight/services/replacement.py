"""Apply a chosen replacement to the content and keep the remaining matches aligned."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

from textinsight.core.errors import StaleMatchError
from textinsight.models.match import Match


@dataclass(frozen=True)
class ReplacementResult:
    content: str
    delta: int


def apply_replacement(content: str, match: Match, replacement: str) -> ReplacementResult:
    """
    Substitute ``content[match.offset:match.end]`` with ``replacement``.

    Raises StaleMatchError if the span falls outside the content, or if the
    text under it differs from the flagged text recorded in the match context.
    """
    if match.end > len(content):
        raise StaleMatchError(
            f"Match span {match.offset}-{match.end} is outside the content ({len(content)} chars)",
            offset=match.offset,
            length=match.length,
        )

    current = content[match.offset:match.end]
    if match.context is not None:
        expected = match.context.flagged_text
        if expected and current != expected:
            raise StaleMatchError(
                f"Content at {match.offset}-{match.end} reads {current!r}, expected {expected!r}",
                offset=match.offset,
                length=match.length,
            )

    new_content = content[:match.offset] + replacement + content[match.end:]
    return ReplacementResult(content=new_content, delta=len(replacement) - match.length)


def rebase_matches(matches: Iterable[Match], applied: Match, delta: int) -> List[Match]:
    """Shift matches that start after the applied span; their keys are left alone."""
    rebased = []
    for match in matches:
        if delta and match.key != applied.key and match.offset >= applied.end:
            match = match.model_copy(update={"offset": match.offset + delta})
        rebased.append(match)
    return rebased


def record_fix(fixed: Mapping[str, str], match: Match, replacement: str) -> Dict[str, str]:
    updated = dict(fixed)
    updated[match.key] = replacement
    return updated
