"""Grammar-check data structures validated at the LanguageTool boundary."""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

DEFAULT_KEY_PREFIX_LENGTH = 20


def build_match_key(offset: int, length: int, message: str, prefix_length: int = DEFAULT_KEY_PREFIX_LENGTH) -> str:
    """Correlation key for a match: offset, length and the head of the message."""
    return f"{offset}:{length}:{message[:prefix_length]}"


class MatchContext(BaseModel):
    """Snippet around the flagged span, as returned by LanguageTool."""

    model_config = ConfigDict(frozen=True)

    text: str
    offset: int = Field(ge=0)
    length: int = Field(ge=0)

    @property
    def flagged_text(self) -> str:
        return self.text[self.offset:self.offset + self.length]


class Match(BaseModel):
    """A flagged span of content with its diagnostic and candidate replacements.

    ``key`` is derived once, when the match is first validated, and travels
    with the match afterwards. Rebasing ``offset`` after an earlier edit keeps
    the original key so fixes recorded against it stay attached.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    offset: int = Field(ge=0)
    length: int = Field(ge=0)
    message: str = Field(min_length=1)
    short_message: str = Field(default="", alias="shortMessage")
    replacements: List[str] = Field(default_factory=list)
    context: Optional[MatchContext] = None
    sentence: str = ""
    rule_id: str = ""
    issue_type: str = ""
    key: str = ""

    @model_validator(mode="before")
    @classmethod
    def _flatten_rule(cls, data: Any) -> Any:
        # LanguageTool nests the rule id and issue type under "rule"
        if isinstance(data, dict) and isinstance(data.get("rule"), dict):
            data = dict(data)
            rule = data.pop("rule")
            data.setdefault("rule_id", rule.get("id", ""))
            data.setdefault("issue_type", rule.get("issueType", ""))
        return data

    @field_validator("replacements", mode="before")
    @classmethod
    def _normalise_replacements(cls, value: object) -> List[str]:
        if value is None:
            return []
        if isinstance(value, (str, dict)):
            value = [value]
        if not isinstance(value, list):
            raise ValueError("replacements must be a list")
        result = []
        for item in value:
            if isinstance(item, dict):
                item = item.get("value")
            if item is None:
                continue
            result.append(str(item))
        return result

    @field_validator("short_message", "sentence", "rule_id", "issue_type", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @model_validator(mode="after")
    def _derive_key(self, info: ValidationInfo) -> "Match":
        if not self.key:
            prefix_length = DEFAULT_KEY_PREFIX_LENGTH
            if info.context:
                prefix_length = info.context.get("key_prefix_length", prefix_length)
            object.__setattr__(self, "key", build_match_key(self.offset, self.length, self.message, prefix_length))
        return self

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def group_sentence(self) -> str:
        """Text the match is grouped under: its sentence, else the context snippet."""
        if self.sentence:
            return self.sentence
        if self.context is not None:
            return self.context.text
        return ""


class DetectedLanguage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    code: str = ""
    confidence: Optional[float] = None


class CheckedLanguage(BaseModel):
    """Language LanguageTool checked against, plus what it detected."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = ""
    code: str = ""
    detected: Optional[DetectedLanguage] = Field(default=None, alias="detectedLanguage")


class GrammarCheckResult(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    matches: List[Match] = Field(default_factory=list)
    language: Optional[CheckedLanguage] = None
