"""
可读性评估 - Flesch Reading Ease computed locally from the submitted text.
"""
import re
from typing import List, Optional

from textinsight.models.analysis import ReadabilityReport, TextStats

_SENTENCE_DELIMITERS = re.compile(r"[.!?]+")
_WHITESPACE = re.compile(r"\s+")
# silent "e", "-es" and "-ed" endings; "-le" keeps its syllable
_SILENT_SUFFIX = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_LEADING_Y = re.compile(r"^y")
_VOWEL_GROUP = re.compile(r"[aeiouy]{1,2}")

# (下限, 标签), 从高到低
READABILITY_BANDS = (
    (90, "Very Easy"),
    (80, "Easy"),
    (70, "Fairly Easy"),
    (60, "Standard"),
    (50, "Fairly Difficult"),
    (30, "Difficult"),
)
LOWEST_BAND = "Very Difficult"


def _require_str(text) -> str:
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    return text


def split_sentences(text: str) -> List[str]:
    """Split on runs of sentence punctuation, dropping empty fragments."""
    _require_str(text)
    return [part for part in _SENTENCE_DELIMITERS.split(text) if part]


def split_words(text: str) -> List[str]:
    _require_str(text)
    return [word for word in _WHITESPACE.split(text.strip()) if word]


def count_syllables(word: str) -> int:
    """Heuristic English syllable count for a single word."""
    word = _require_str(word).lower()
    if len(word) <= 3:
        return 1
    word = _SILENT_SUFFIX.sub("", word)
    word = _LEADING_Y.sub("", word)
    groups = _VOWEL_GROUP.findall(word)
    return len(groups) if groups else 1


def readability_label(score: float) -> str:
    for lower_bound, label in READABILITY_BANDS:
        if score >= lower_bound:
            return label
    return LOWEST_BAND


def estimate(text: str) -> ReadabilityReport:
    """
    计算 Flesch Reading Ease

    score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)

    Blank text scores 0 with no label instead of dividing by zero.
    """
    words = split_words(text)
    if not words:
        return ReadabilityReport(score=0.0, label=None)

    sentence_count = max(len(split_sentences(text)), 1)
    syllable_count = sum(count_syllables(word) for word in words)

    asl = len(words) / sentence_count
    asw = syllable_count / len(words)
    score = round(206.835 - 1.015 * asl - 84.6 * asw, 2)

    return ReadabilityReport(
        score=score,
        label=readability_label(score),
        sentence_count=sentence_count,
        word_count=len(words),
        syllable_count=syllable_count,
    )


def flesch_reading_ease(text: str) -> float:
    return estimate(text).score


def character_count(text: str) -> int:
    """Characters excluding whitespace."""
    return len(_WHITESPACE.sub("", _require_str(text)))


def compute_text_stats(text: str, report: Optional[ReadabilityReport] = None) -> TextStats:
    report = report or estimate(text)
    return TextStats(
        word_count=report.word_count,
        character_count=character_count(text),
        readability=report,
    )
