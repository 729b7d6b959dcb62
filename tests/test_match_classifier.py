from conftest import STORE_TEXT, make_match

from textinsight.models.match import Match
from textinsight.services.match_classifier import (
    classify_matches,
    group_by_sentence,
    is_correction,
    match_key,
)


def test_match_key_uses_offset_length_and_message_prefix(store_match):
    assert store_match.key == "0:5:Did you mean 'They'r"
    assert match_key(store_match) == store_match.key
    assert match_key(store_match, prefix_length=3) == "0:5:Did"


def test_identical_span_and_message_share_a_key():
    first = make_match(replacements=("They're",))
    second = make_match(replacements=("They're", "There"))
    assert first.key == second.key


def test_single_replacement_is_a_correction(store_match):
    classified = classify_matches([store_match], {})

    assert classified.corrections == {STORE_TEXT: [store_match]}
    assert classified.suggestions == {}


def test_fixed_match_moves_to_suggestions(store_match):
    fixed = {store_match.key: "They're"}

    classified = classify_matches([store_match], fixed)

    assert classified.corrections == {}
    assert classified.suggestions == {STORE_TEXT: [store_match]}
    assert classified.applied_value(store_match) == "They're"
    assert classified.is_applied(store_match)


def test_multiple_or_no_replacements_are_suggestions():
    several = make_match(offset=6, length=5, message="Consider another word", replacements=("heading", "walking"))
    none = make_match(offset=12, length=2, message="Style issue", replacements=())

    assert not is_correction(several, {})
    assert not is_correction(none, {})
    classified = classify_matches([several, none])
    assert classified.suggestions == {STORE_TEXT: [several, none]}


def test_grouping_preserves_first_seen_sentence_order():
    a1 = make_match(offset=0, sentence="Sentence A.")
    b1 = make_match(offset=20, sentence="Sentence B.")
    a2 = make_match(offset=5, message="Another issue", sentence="Sentence A.")

    groups = group_by_sentence([a1, b1, a2])

    assert list(groups) == ["Sentence A.", "Sentence B."]
    assert groups["Sentence A."] == [a1, a2]


def test_grouping_falls_back_to_context_text():
    match = Match.model_validate(
        {
            "offset": 0,
            "length": 3,
            "message": "Typo",
            "replacements": [{"value": "The"}],
            "context": {"text": "Teh cat", "offset": 0, "length": 3},
        }
    )

    assert list(group_by_sentence([match])) == ["Teh cat"]


def test_classification_is_idempotent(store_match):
    other = make_match(offset=6, length=5, message="Two options", replacements=("a", "b"))
    fixed = {other.key: "a"}

    first = classify_matches([store_match, other], fixed)
    second = classify_matches([store_match, other], fixed)

    assert first == second


def test_classify_does_not_mutate_fixed_map(store_match):
    fixed = {}
    classified = classify_matches([store_match], fixed)
    classified.fixed["x"] = "y"
    assert fixed == {}


def test_to_model_keeps_partitions(store_match):
    model = classify_matches([store_match]).to_model()
    assert model.corrections[STORE_TEXT][0].key == store_match.key
    assert model.suggestions == {}
