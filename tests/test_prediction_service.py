"""Labelling rules applied on top of the classifier probabilities."""

from __future__ import annotations

import pytest

from sepitori.services.prediction_service import (
    MIXED,
    NON_SEPITORI,
    NOT_RECOGNIZED,
    SEPITORI,
    LabelRules,
    decide_label,
    predict,
)

RULES = LabelRules()


@pytest.mark.parametrize(
    "word_count, unseen_count, sep, non, expected",
    [
        (0, 0, 0.5, 0.5, NOT_RECOGNIZED),
        (3, 3, 0.9, 0.1, NOT_RECOGNIZED),
        (2, 0, 0.8, 0.2, SEPITORI),
        (2, 0, 0.2, 0.8, NON_SEPITORI),
        (2, 0, 0.6, 0.4, MIXED),
        (2, 0, 0.65, 0.35, SEPITORI),
        (5, 3, 0.9, 0.1, MIXED),
        (5, 3, 0.1, 0.9, MIXED),
        (4, 2, 0.9, 0.1, SEPITORI),
        (1, 0, 0.0, 0.0, MIXED),
    ],
)
def test_decide_label(word_count, unseen_count, sep, non, expected):
    assert decide_label(word_count, unseen_count, sep, non, RULES) == expected


def test_confidence_is_normalized_over_the_two_labels():
    # Raw probabilities are small because a third label takes most of the mass.
    assert decide_label(2, 0, 0.14, 0.06, RULES) == SEPITORI


def test_downgrade_can_be_disabled():
    rules = LabelRules(downgrade_mixed_on_unseen=False)
    assert decide_label(5, 3, 0.9, 0.1, rules) == SEPITORI


def test_custom_threshold():
    rules = LabelRules(confidence_threshold=0.9)
    assert decide_label(2, 0, 0.8, 0.2, rules) == MIXED


def test_label_rules_from_settings():
    class FakeSettings:
        CONFIDENCE_THRESHOLD = 0.7
        MIXED_UNSEEN_RATIO = 0.25
        DOWNGRADE_MIXED_ON_UNSEEN = False

    assert LabelRules.from_settings(FakeSettings) == LabelRules(0.7, 0.25, False)


def test_predict_all_unseen_is_not_recognized(classifier):
    result = predict(classifier, "Lekker ntwana!")
    assert result["final_label"] == NOT_RECOGNIZED
    assert result["probabilities"]["unseen_words"] == ["lekker", "ntwana"]


def test_predict_clear_sepitori(classifier):
    result = predict(classifier, "Heita bra!")
    probabilities = result["probabilities"]

    assert result["text"] == "Heita bra!"
    assert result["final_label"] == SEPITORI
    assert probabilities["unseen_words"] == []
    assert probabilities["sepitori"] > probabilities["non_sepitori"]
    assert probabilities["sepitori_confidence"] + probabilities["non_confidence"] == pytest.approx(1.0)


def test_predict_clear_non_sepitori(classifier):
    assert predict(classifier, "How are you today?")["final_label"] == NON_SEPITORI


def test_predict_ambiguous_is_mixed(classifier):
    assert predict(classifier, "bra you")["final_label"] == MIXED


def test_predict_mostly_unseen_is_downgraded(classifier):
    result = predict(classifier, "heita bra zulu xhosa venda")
    assert result["final_label"] == MIXED
    assert result["probabilities"]["unseen_words"] == ["zulu", "xhosa", "venda"]

    relaxed = LabelRules(downgrade_mixed_on_unseen=False)
    assert predict(classifier, "heita bra zulu xhosa venda", relaxed)["final_label"] == SEPITORI


def test_third_label_takes_probability_mass(classifier):
    classifier.add_document("moro moro", "tsotsitaal")
    classifier.train()

    probabilities = predict(classifier, "moro")["probabilities"]
    assert probabilities["sepitori"] + probabilities["non_sepitori"] < 0.99
    assert probabilities["sepitori_confidence"] + probabilities["non_confidence"] == pytest.approx(1.0)
