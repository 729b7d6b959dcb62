import pytest
from conftest import languagetool_match
from pydantic import ValidationError

from textinsight.models.match import GrammarCheckResult, Match, build_match_key


def test_languagetool_match_is_normalised():
    match = Match.model_validate(languagetool_match(replacements=("They're", "There")))

    assert match.replacements == ["They're", "There"]
    assert match.rule_id == "THEIR_IS"
    assert match.end == 5
    assert match.key == build_match_key(0, 5, "Did you mean 'They're'?")


def test_replacements_accept_plain_strings_and_skip_missing_values():
    match = Match(offset=0, length=1, message="m", replacements=["a", {"value": "b"}, {"other": 1}])
    assert match.replacements == ["a", "b"]


def test_key_sent_by_client_is_kept():
    match = Match(offset=7, length=5, message="Moved", key="0:5:Moved")
    assert match.key == "0:5:Moved"


def test_match_is_frozen():
    match = Match(offset=0, length=1, message="m")
    with pytest.raises(ValidationError):
        match.offset = 3


@pytest.mark.parametrize(
    "data",
    [
        {"length": 1, "message": "m"},
        {"offset": 0, "length": 1},
        {"offset": 0, "length": 1, "message": ""},
        {"offset": 0, "length": -2, "message": "m"},
        {"offset": 0, "length": 1, "message": "m", "replacements": 5},
    ],
)
def test_malformed_matches_are_rejected(data):
    with pytest.raises(ValidationError):
        Match.model_validate(data)


def test_result_without_language():
    result = GrammarCheckResult.model_validate({"matches": []})
    assert result.language is None
    assert result.matches == []
