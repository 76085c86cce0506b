"""Turns raw class probabilities into a final Sepitori label."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sepitori.nlp.bayes_classifier import BayesClassifier

logger = logging.getLogger(__name__)

SEPITORI = "sepitori"
NON_SEPITORI = "non-sepitori"
MIXED = "mixed"
NOT_RECOGNIZED = "not recognized"


@dataclass(frozen=True)
class LabelRules:
    """Thresholds applied on top of the classifier probabilities.

    Attributes:
        confidence_threshold: Minimum normalized confidence for a clear label.
        mixed_unseen_ratio: Unseen-word ratio above which a clear label becomes ``mixed``.
        downgrade_mixed_on_unseen: Whether the unseen-ratio downgrade applies at all.
    """

    confidence_threshold: float = 0.65
    mixed_unseen_ratio: float = 0.5
    downgrade_mixed_on_unseen: bool = True

    @classmethod
    def from_settings(cls, settings: Any) -> "LabelRules":
        return cls(
            confidence_threshold=settings.CONFIDENCE_THRESHOLD,
            mixed_unseen_ratio=settings.MIXED_UNSEEN_RATIO,
            downgrade_mixed_on_unseen=settings.DOWNGRADE_MIXED_ON_UNSEEN,
        )


def _too_many_unseen(word_count: int, unseen_count: int, rules: LabelRules) -> bool:
    if not rules.downgrade_mixed_on_unseen or word_count <= 1:
        return False
    return unseen_count / word_count > rules.mixed_unseen_ratio


def decide_label(
    word_count: int,
    unseen_count: int,
    sepitori: float,
    non_sepitori: float,
    rules: LabelRules,
) -> str:
    if word_count == 0 or unseen_count == word_count:
        return NOT_RECOGNIZED

    total = (sepitori + non_sepitori) or 1.0
    sepitori_confidence = sepitori / total
    non_confidence = non_sepitori / total

    if sepitori_confidence >= rules.confidence_threshold and sepitori > 0:
        label = SEPITORI
    elif non_confidence >= rules.confidence_threshold and non_sepitori > 0:
        label = NON_SEPITORI
    else:
        return MIXED

    if _too_many_unseen(word_count, unseen_count, rules):
        return MIXED
    return label


def predict(
    classifier: BayesClassifier,
    text: str,
    rules: Optional[LabelRules] = None,
) -> Dict[str, Any]:
    rules = rules or LabelRules()

    words, unseen_words, classifications = classifier.analyze(text)
    scores = dict(classifications)
    sepitori = scores.get(SEPITORI, 0.0)
    non_sepitori = scores.get(NON_SEPITORI, 0.0)

    total = (sepitori + non_sepitori) or 1.0
    final_label = decide_label(len(words), len(unseen_words), sepitori, non_sepitori, rules)

    logger.info(
        "--- [PREDICT] '%s' -> %s (sepitori=%.4f, non=%.4f, unseen=%s/%s)",
        text,
        final_label,
        sepitori,
        non_sepitori,
        len(unseen_words),
        len(words),
    )

    return {
        "text": text,
        "final_label": final_label,
        "probabilities": {
            "sepitori": sepitori,
            "non_sepitori": non_sepitori,
            "sepitori_confidence": sepitori / total,
            "non_confidence": non_sepitori / total,
            "unseen_words": unseen_words,
        },
    }
