"""Bag-of-words Naive Bayes classifier backed by scikit-learn."""

from __future__ import annotations

import logging
import os
import pickle
import tempfile
from pathlib import Path
from typing import FrozenSet, List, NamedTuple, Optional, Tuple

from sklearn.feature_extraction.text import CountVectorizer
from sklearn.naive_bayes import MultinomialNB
from sklearn.pipeline import Pipeline

from sepitori.nlp.normalizer import Tokenizer, normalize_text

logger = logging.getLogger(__name__)


class ClassifierError(Exception):
    """Raised when the classifier cannot be trained, saved or loaded."""


class _FittedModel(NamedTuple):
    pipeline: Pipeline
    features: FrozenSet[str]


class Analysis(NamedTuple):
    """Tokens, unseen tokens and label scores computed from one model version."""

    words: List[str]
    unseen_words: List[str]
    classifications: List[Tuple[str, float]]


def _classifications(model: Optional[_FittedModel], text: str) -> List[Tuple[str, float]]:
    if model is None:
        return []

    probabilities = model.pipeline.predict_proba([text])[0]
    scored = [
        (str(label), float(value))
        for label, value in zip(model.pipeline.classes_, probabilities)
    ]
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored


class BayesClassifier:
    """Keeps every training document and refits the whole pipeline on ``train()``.

    The fitted pipeline and its vocabulary live in a single ``_model`` tuple
    that ``train()`` replaces in one assignment. Readers take one reference to
    it, so they never mix the vocabulary of one fit with the probabilities of
    another.
    """

    def __init__(self, stem: bool = False, remove_stopwords: bool = False) -> None:
        self.tokenizer = Tokenizer(stem=stem, remove_stopwords=remove_stopwords)
        self.documents: List[Tuple[str, str]] = []
        self._model: Optional[_FittedModel] = None

    @property
    def is_trained(self) -> bool:
        return self._model is not None

    @property
    def labels(self) -> List[str]:
        model = self._model
        if model is None:
            return []
        return [str(label) for label in model.pipeline.classes_]

    @property
    def known_features(self) -> FrozenSet[str]:
        model = self._model
        return model.features if model is not None else frozenset()

    @property
    def feature_count(self) -> int:
        return len(self.known_features)

    def is_known(self, word: str) -> bool:
        return word in self.known_features

    def tokenize(self, text: str) -> List[str]:
        return self.tokenizer(text)

    def add_document(self, text: str, label: str) -> None:
        self.documents.append((normalize_text(text), label))

    def train(self) -> None:
        if not self.documents:
            raise ClassifierError("No training documents")

        texts = [text for text, _ in self.documents]
        labels = [label for _, label in self.documents]

        pipeline = Pipeline(
            [
                ("vectorizer", CountVectorizer(analyzer=self.tokenizer)),
                ("bayes", MultinomialNB(alpha=1.0)),
            ]
        )
        try:
            pipeline.fit(texts, labels)
        except ValueError as exc:
            # CountVectorizer refuses a corpus where no document has a token.
            raise ClassifierError(f"Training failed: {exc}") from exc

        vocabulary = pipeline.named_steps["vectorizer"].vocabulary_
        self._model = _FittedModel(pipeline, frozenset(vocabulary))
        logger.info(
            "--- [BAYES] Trained on %s documents, %s features, labels=%s",
            len(texts),
            len(vocabulary),
            self.labels,
        )

    def get_classifications(self, text: str) -> List[Tuple[str, float]]:
        """Return ``(label, probability)`` pairs, most probable first."""

        return _classifications(self._model, text)

    def analyze(self, text: str) -> Analysis:
        model = self._model
        words = self.tokenize(text)
        features = model.features if model is not None else frozenset()
        unseen_words = [word for word in words if word not in features]
        return Analysis(words, unseen_words, _classifications(model, text))

    def classify(self, text: str) -> Optional[str]:
        scored = self.get_classifications(text)
        return scored[0][0] if scored else None

    def save(self, path: str | Path) -> None:
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as handle:
                    pickle.dump(self, handle)
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise ClassifierError(f"Could not save classifier to {target}: {exc}") from exc
        logger.info("--- [BAYES] Model saved to '%s'", target)

    @classmethod
    def load(cls, path: str | Path) -> "BayesClassifier":
        source = Path(path)
        if not source.exists():
            raise ClassifierError(f"Model file not found: {source}")

        try:
            with open(source, "rb") as handle:
                loaded = pickle.load(handle)
        except (OSError, EOFError, pickle.UnpicklingError, AttributeError, ImportError) as exc:
            raise ClassifierError(f"Could not load classifier from {source}: {exc}") from exc

        if not isinstance(loaded, cls):
            raise ClassifierError(f"{source} does not contain a {cls.__name__}")

        logger.info(
            "--- [BAYES] Model loaded from '%s' (%s documents, %s features)",
            source,
            len(loaded.documents),
            loaded.feature_count,
        )
        return loaded
