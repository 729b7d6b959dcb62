"""Partition grammar matches into one-click corrections and suggestions, grouped by sentence."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from textinsight.models.analysis import GroupedMatches
from textinsight.models.match import Match, build_match_key

FixedMatches = Mapping[str, str]


def match_key(match: Match, prefix_length: Optional[int] = None) -> str:
    """Key a match is tracked by.

    Without ``prefix_length`` this is the key frozen on the match when it was
    first validated.
    """
    if prefix_length is None:
        return match.key
    return build_match_key(match.offset, match.length, match.message, prefix_length)


def is_correction(match: Match, fixed: FixedMatches) -> bool:
    """Exactly one candidate replacement and not already applied."""
    return len(match.replacements) == 1 and match.key not in fixed


def group_by_sentence(matches: Iterable[Match]) -> Dict[str, List[Match]]:
    """Group matches by enclosing sentence, keeping first-seen sentence order."""
    groups: Dict[str, List[Match]] = {}
    for match in matches:
        groups.setdefault(match.group_sentence, []).append(match)
    return groups


@dataclass
class ClassifiedMatches:
    corrections: Dict[str, List[Match]] = field(default_factory=dict)
    suggestions: Dict[str, List[Match]] = field(default_factory=dict)
    fixed: Dict[str, str] = field(default_factory=dict)

    def applied_value(self, match: Match) -> Optional[str]:
        """Replacement the user applied to ``match``, if any."""
        return self.fixed.get(match.key)

    def is_applied(self, match: Match) -> bool:
        return match.key in self.fixed

    def to_model(self) -> GroupedMatches:
        return GroupedMatches(corrections=self.corrections, suggestions=self.suggestions)


def classify_matches(matches: Iterable[Match], fixed: Optional[FixedMatches] = None) -> ClassifiedMatches:
    """
    Split matches into corrections and suggestions.

    A match is a correction when it has a single replacement and its key is not
    in ``fixed``. Everything else, including matches the user already fixed, is
    a suggestion. Both partitions are grouped with :func:`group_by_sentence`.
    """
    fixed = dict(fixed or {})
    corrections: List[Match] = []
    suggestions: List[Match] = []
    for match in matches:
        if is_correction(match, fixed):
            corrections.append(match)
        else:
            suggestions.append(match)

    return ClassifiedMatches(
        corrections=group_by_sentence(corrections),
        suggestions=group_by_sentence(suggestions),
        fixed=fixed,
    )
